"""Component partitioning and pseudo-node synthesis."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx

from mechnet.graph import Edge, Node
from mechnet.layout.types import PseudoNode, PseudoNodeResult
from mechnet.log import get_logger

logger = get_logger(__name__)

# ─── Connected Components ─────────────────────────────────────────────────────


def find_components(graph: nx.DiGraph) -> list[list[str]]:
    """Partition the graph into connected components, ignoring edge direction.

    Members of each component keep the graph's node order. Components are
    sorted by size descending, ties broken by the smallest member id, so the
    result is reproducible across runs.
    """
    position: dict[str, int] = {node: i for i, node in enumerate(graph.nodes)}

    components: list[list[str]] = [
        sorted(members, key=position.__getitem__) for members in nx.weakly_connected_components(graph)
    ]
    components.sort(key=lambda comp: (-len(comp), min(comp)))
    return components


def component_graph(graph: nx.DiGraph, members: Sequence[str]) -> nx.DiGraph:
    """Copy the induced subgraph on ``members`` with a deterministic node order.

    Nodes follow ``members`` order and edges follow the parent's edge order,
    which a subgraph view does not guarantee.
    """
    member_set = set(members)
    sub: nx.DiGraph = nx.DiGraph()
    for node_id in members:
        sub.add_node(node_id, **graph.nodes[node_id])
    for src, tgt, attrs in graph.edges(data=True):
        if src in member_set and tgt in member_set:
            sub.add_edge(src, tgt, **attrs)
    return sub


# ─── Pseudo Nodes ─────────────────────────────────────────────────────────────


def find_pseudo_nodes(
    visible_nodes: Sequence[Node],
    all_nodes: Sequence[Node],
    all_edges: Iterable[Edge],
) -> PseudoNodeResult:
    """Synthesise one pseudo-node per hidden module that bridges visible modules.

    A hidden module bridges when some visible node feeds into it, it feeds
    some visible node, and the feeding and fed module sets differ. The
    pseudo-node's ``connects_to`` holds the entry points of the fed modules:
    visible nodes whose every visible incoming edge is one of the direct
    cross-module edges being replaced. Those replaced edges are returned in
    ``excluded_edges`` so they are not also laid out.
    """
    all_edges = list(all_edges)
    visible: dict[str, Node] = {n.id: n for n in visible_nodes}

    # Hidden nodes grouped by module, in first-appearance order.
    hidden_by_module: dict[str, list[str]] = {}
    for node in all_nodes:
        if node.id not in visible:
            hidden_by_module.setdefault(node.module_id, []).append(node.id)

    known = {n.id for n in all_nodes}
    outgoing: dict[str, list[str]] = {n.id: [] for n in all_nodes}
    incoming: dict[str, list[str]] = {n.id: [] for n in all_nodes}
    for edge in all_edges:
        if edge.source in known and edge.target in known:
            outgoing[edge.source].append(edge.target)
            incoming[edge.target].append(edge.source)

    result = PseudoNodeResult()

    for module_id, hidden_ids in hidden_by_module.items():
        sources_into: dict[str, None] = {}
        targets_from: dict[str, None] = {}
        for hidden_id in hidden_ids:
            for src in incoming[hidden_id]:
                if src in visible:
                    sources_into[src] = None
            for tgt in outgoing[hidden_id]:
                if tgt in visible:
                    targets_from[tgt] = None

        if not sources_into or not targets_from:
            continue

        source_modules = {visible[n].module_id for n in sources_into}
        target_modules = {visible[n].module_id for n in targets_from}
        if source_modules == target_modules:
            continue

        to_exclude: set[str] = set()
        for edge in all_edges:
            src_node = visible.get(edge.source)
            tgt_node = visible.get(edge.target)
            if (
                src_node is not None
                and tgt_node is not None
                and src_node.module_id in source_modules
                and tgt_node.module_id in target_modules
                and src_node.module_id != tgt_node.module_id
            ):
                to_exclude.add(edge.id)

        entry_points: list[str] = []
        for node in visible_nodes:
            if node.module_id not in target_modules:
                continue
            has_remaining_incoming = any(
                edge.target == node.id and edge.source in visible and edge.id not in to_exclude
                for edge in all_edges
            )
            if not has_remaining_incoming:
                entry_points.append(node.id)

        pseudo = PseudoNode.for_module(module_id, tuple(sources_into), tuple(entry_points))
        result.pseudo_nodes.append(pseudo)
        result.excluded_edges |= to_exclude
        logger.debug(
            "pseudo-node %s: %d feeding nodes, %d entry points, %d edges replaced",
            pseudo.id,
            len(pseudo.connects_from),
            len(pseudo.connects_to),
            len(to_exclude),
        )

    return result
