"""Pathway configurations and their summary statistics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from mechnet.config import DEFAULT_MAX_DEPTH
from mechnet.graph import DrugLibraryEntry, DrugTarget, GraphModel
from mechnet.log import get_logger
from mechnet.pathway.loops import Involvement, LoopInvolvement, analyze_loop_involvement
from mechnet.pathway.traversal import compute_pathway

logger = get_logger(__name__)


@dataclass(frozen=True)
class PathwayConfig:
    """Persisted shape of a computed pathway.

    ``get_pathway_stats`` adds the sizes of the three node lists without
    deduplicating them.
    """

    drug_id: str
    upstream_nodes: tuple[str, ...] = ()
    target_nodes: tuple[str, ...] = ()
    downstream_nodes: tuple[str, ...] = ()
    pathway_edges: tuple[str, ...] = ()
    relevant_loops: tuple[LoopInvolvement, ...] = ()
    affected_modules: tuple[str, ...] = ()
    computed_at: str = ""


@dataclass(frozen=True)
class PathwayStats:
    total_nodes: int = 0
    upstream_count: int = 0
    target_count: int = 0
    downstream_count: int = 0
    edge_count: int = 0
    module_count: int = 0
    loop_count: int = 0
    loops_breaking: int = 0
    loops_weakening: int = 0
    loops_strengthening: int = 0


def get_pathway_stats(pathway: PathwayConfig) -> PathwayStats:
    """Count nodes, edges, modules and loops of a pathway configuration."""

    def loops_with(kind: Involvement) -> int:
        return sum(1 for loop in pathway.relevant_loops if loop.involvement is kind)

    return PathwayStats(
        total_nodes=len(pathway.upstream_nodes) + len(pathway.target_nodes) + len(pathway.downstream_nodes),
        upstream_count=len(pathway.upstream_nodes),
        target_count=len(pathway.target_nodes),
        downstream_count=len(pathway.downstream_nodes),
        edge_count=len(pathway.pathway_edges),
        module_count=len(pathway.affected_modules),
        loop_count=len(pathway.relevant_loops),
        loops_breaking=loops_with(Involvement.BREAKS),
        loops_weakening=loops_with(Involvement.WEAKENS),
        loops_strengthening=loops_with(Involvement.STRENGTHENS),
    )


def calculate_pathway_config(
    pathway_id: str,
    targets: Sequence[DrugTarget],
    graph: GraphModel,
    max_depth: int = DEFAULT_MAX_DEPTH,
    computed_at: datetime | None = None,
) -> PathwayConfig:
    """Compute the pathway and loop involvements of ``targets`` over ``graph``.

    Node, edge and module lists are sorted so the configuration is stable.
    ``computed_at`` defaults to the current UTC time.
    """
    adjacency = graph.adjacency()
    result = compute_pathway(targets, adjacency, graph.nodes, max_depth)
    loops = analyze_loop_involvement(targets, result, graph.feedback_loops, graph.edges)
    stamp = computed_at or datetime.now(timezone.utc)

    return PathwayConfig(
        drug_id=pathway_id,
        upstream_nodes=tuple(sorted(result.upstream_nodes)),
        target_nodes=tuple(sorted(result.target_nodes)),
        downstream_nodes=tuple(sorted(result.downstream_nodes)),
        pathway_edges=tuple(sorted(result.pathway_edges)),
        relevant_loops=tuple(loops),
        affected_modules=tuple(sorted(result.affected_modules)),
        computed_at=stamp.isoformat(),
    )


def calculate_drug_pathway(
    drug: DrugLibraryEntry,
    graph: GraphModel,
    max_depth: int = DEFAULT_MAX_DEPTH,
    computed_at: datetime | None = None,
) -> PathwayConfig:
    return calculate_pathway_config(drug.id, drug.primary_targets, graph, max_depth, computed_at)


def calculate_all_drug_pathways(
    drugs: Iterable[DrugLibraryEntry],
    graph: GraphModel,
    max_depth: int = DEFAULT_MAX_DEPTH,
    computed_at: datetime | None = None,
) -> dict[str, PathwayConfig]:
    """Compute a pathway configuration for every drug, keyed by drug id."""
    pathways: dict[str, PathwayConfig] = {}
    for drug in drugs:
        pathways[drug.id] = calculate_drug_pathway(drug, graph, max_depth, computed_at)
    logger.debug("computed %d drug pathways", len(pathways))
    return pathways
