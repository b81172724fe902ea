"""Crossing minimisation — barycenter ordering of nodes within each layer."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import networkx as nx

from mechnet.graph import Node, NodeCategory
from mechnet.layout.types import PseudoNode

DEFAULT_SWEEPS = 10

# Boundary nodes lead each module's run within a layer, stocks trail.
CATEGORY_PRIORITY: dict[NodeCategory, int] = {
    NodeCategory.BOUNDARY: 0,
    NodeCategory.STATE: 1,
    NodeCategory.STOCK: 2,
}


def _initial_key(graph: nx.DiGraph, node_id: str) -> tuple[str, int]:
    data = graph.nodes[node_id].get("data")
    if isinstance(data, Node):
        return (data.module_id, CATEGORY_PRIORITY[data.category])
    if isinstance(data, PseudoNode):
        return (data.module_id, 1)
    return ("", 1)


def initial_ordering(graph: nx.DiGraph, layers: dict[str, int]) -> list[list[str]]:
    """Group nodes by layer (ascending) and sort each layer by (module, category).

    Only layers that hold at least one node appear in the result. Ties keep
    the graph's node order.
    """
    groups: dict[int, list[str]] = {}
    for node_id in graph.nodes:
        if node_id in layers:
            groups.setdefault(layers[node_id], []).append(node_id)

    ordering: list[list[str]] = []
    for layer in sorted(groups):
        ordering.append(sorted(groups[layer], key=lambda n: _initial_key(graph, n)))
    return ordering


def minimise_crossings(
    graph: nx.DiGraph,
    layers: dict[str, int],
    sweeps: int = DEFAULT_SWEEPS,
) -> list[list[str]]:
    """Reduce edge crossings using the barycenter heuristic.

    Starts from ``initial_ordering`` and runs a fixed number of sweeps. A
    forward sweep reorders each layer by the mean position of each node's
    predecessors in the preceding layer; a backward sweep uses successors in
    the following layer. Nodes without such neighbours keep their current
    position as their weight. There is no convergence check.

    Returns one list per non-empty layer, in ascending layer order.
    """
    ordering = initial_ordering(graph, layers)
    position: dict[str, float] = {}
    for layer_nodes in ordering:
        position.update({nid: float(i) for i, nid in enumerate(layer_nodes)})

    for _sweep in range(sweeps):
        for idx in range(1, len(ordering)):
            _reorder(ordering[idx], set(ordering[idx - 1]), position, graph.predecessors)
        for idx in range(len(ordering) - 2, -1, -1):
            _reorder(ordering[idx], set(ordering[idx + 1]), position, graph.successors)

    return ordering


def _reorder(
    layer_nodes: list[str],
    adjacent: set[str],
    position: dict[str, float],
    neighbours: Callable[[str], Iterable[str]],
) -> None:
    weights = {nid: _barycenter(nid, adjacent, position, neighbours) for nid in layer_nodes}
    layer_nodes.sort(key=weights.__getitem__)
    for i, nid in enumerate(layer_nodes):
        position[nid] = float(i)


def _barycenter(
    node_id: str,
    adjacent: set[str],
    position: dict[str, float],
    neighbours: Callable[[str], Iterable[str]],
) -> float:
    """Mean position of a node's neighbours in the adjacent layer.

    Falls back to the node's own current position when it has none.
    """
    positions = [position[nb] for nb in neighbours(node_id) if nb in adjacent]
    if not positions:
        return position[node_id]
    return sum(positions) / len(positions)


def count_crossings(ordering: list[list[str]], graph: nx.DiGraph) -> int:
    """Count edge crossings between consecutive layers (pairwise inversions)."""
    total = 0
    for l_idx in range(len(ordering) - 1):
        tgt_pos: dict[str, int] = {nid: i for i, nid in enumerate(ordering[l_idx + 1])}
        spans: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[l_idx]):
            if src_id not in graph:
                continue
            for nb in graph.successors(src_id):
                if nb in tgt_pos:
                    spans.append((sp, tgt_pos[nb]))
        for i, (s1, t1) in enumerate(spans):
            for s2, t2 in spans[i + 1 :]:
                if (s1 - s2) * (t1 - t2) < 0:
                    total += 1
    return total
