"""Pathway traversal — bounded multi-source BFS from intervention targets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from mechnet.config import DEFAULT_MAX_DEPTH
from mechnet.graph import AdjacencyIndex, DrugTarget, Node


@dataclass(frozen=True)
class PathwayResult:
    """Nodes and edges reachable from a set of targets.

    ``upstream_nodes`` and ``downstream_nodes`` never contain a target, but
    they can share nodes: a node on a cycle through a target, or between two
    targets, is reached in both directions.
    ``all_nodes`` is the union of the three sets.
    """

    target_nodes: frozenset[str] = field(default_factory=frozenset)
    upstream_nodes: frozenset[str] = field(default_factory=frozenset)
    downstream_nodes: frozenset[str] = field(default_factory=frozenset)
    all_nodes: frozenset[str] = field(default_factory=frozenset)
    pathway_edges: frozenset[str] = field(default_factory=frozenset)
    affected_modules: frozenset[str] = field(default_factory=frozenset)


def _bfs(starts: Iterable[str], neighbours: Mapping[str, Sequence[str]], max_depth: int) -> set[str]:
    """Expand frontier by frontier from all ``starts`` at once.

    Returns every node reached within ``max_depth`` hops, starts included.
    Starts unknown to ``neighbours`` are ignored. A node is visited once, at
    the smallest depth any start reaches it.
    """
    frontier = [n for n in dict.fromkeys(starts) if n in neighbours]
    visited = set(frontier)

    for _depth in range(max_depth):
        next_frontier: list[str] = []
        for node_id in frontier:
            for nb in neighbours[node_id]:
                if nb not in visited:
                    visited.add(nb)
                    next_frontier.append(nb)
        if not next_frontier:
            break
        frontier = next_frontier

    return visited


def compute_pathway(
    targets: Sequence[DrugTarget],
    adjacency: AdjacencyIndex,
    nodes: Sequence[Node],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PathwayResult:
    """Compute upstream and downstream reach of ``targets`` within ``max_depth`` hops.

    Upstream follows ``adjacency.incoming``, downstream follows
    ``adjacency.outgoing``. Targets are never counted as upstream or
    downstream, even when another target reaches them. A target id unknown
    to the adjacency index still appears in ``target_nodes`` but contributes
    no traversal. ``max_depth <= 0`` yields empty upstream/downstream sets.
    """
    target_nodes = frozenset(t.node_id for t in targets)
    start_ids = [t.node_id for t in targets]
    depth = max(0, max_depth)

    upstream = frozenset(_bfs(start_ids, adjacency.incoming, depth) - target_nodes)
    downstream = frozenset(_bfs(start_ids, adjacency.outgoing, depth) - target_nodes)
    all_nodes = upstream | target_nodes | downstream

    pathway_edges = frozenset(
        edge_id
        for (src, tgt), edge_id in adjacency.edge_by_pair.items()
        if src in all_nodes and tgt in all_nodes
    )

    module_of = {n.id: n.module_id for n in nodes}
    affected_modules = frozenset(module_of[n] for n in all_nodes if n in module_of)

    return PathwayResult(
        target_nodes=target_nodes,
        upstream_nodes=upstream,
        downstream_nodes=downstream,
        all_nodes=all_nodes,
        pathway_edges=pathway_edges,
        affected_modules=affected_modules,
    )
