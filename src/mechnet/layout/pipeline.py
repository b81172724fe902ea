"""Full layout pipeline.

  1. Build the layout graph (visible nodes, pseudo-nodes, non-excluded edges)
  2. Partition into connected components
  3. Per component: layer assignment, crossing minimisation, coordinates
  4. Geometric back-edge detection over the final coordinates
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx

from mechnet.config import LayoutConfig
from mechnet.graph import Edge, GraphModel, Node
from mechnet.layout.components import component_graph, find_components, find_pseudo_nodes
from mechnet.layout.coordinates import assign_coordinates, find_back_edges
from mechnet.layout.layering import LayerAssignment
from mechnet.layout.ordering import count_crossings, minimise_crossings
from mechnet.layout.types import LayoutPosition, LayoutResult, PseudoNode
from mechnet.log import get_logger

logger = get_logger(__name__)


def build_layout_graph(
    nodes: Sequence[Node],
    edges: Iterable[Edge],
    pseudo_nodes: Sequence[PseudoNode] = (),
    excluded_edge_ids: Iterable[str] = (),
) -> tuple[nx.DiGraph, list[tuple[str, str, str]]]:
    """Build the DiGraph the layout phases run on.

    Each node carries its ``Node`` or ``PseudoNode`` under the ``data``
    attribute. Real edges keep their id under ``id``; pseudo-node edges carry
    ``pseudo=True``. Edges with an endpoint outside ``nodes``, and edges in
    ``excluded_edge_ids``, are left out.

    Returns:
        ``(graph, real_edges)`` where ``real_edges`` lists every kept real
        edge as ``(source, target, edge_id)``, parallel edges included.
    """
    excluded = set(excluded_edge_ids)
    g: nx.DiGraph = nx.DiGraph()
    for node in nodes:
        g.add_node(node.id, data=node)
    real_ids = set(g.nodes)
    for pn in pseudo_nodes:
        g.add_node(pn.id, data=pn)

    real_edges: list[tuple[str, str, str]] = []
    for edge in edges:
        if edge.id in excluded:
            continue
        if edge.source not in real_ids or edge.target not in real_ids:
            continue
        g.add_edge(edge.source, edge.target, id=edge.id)
        real_edges.append((edge.source, edge.target, edge.id))

    for pn in pseudo_nodes:
        for from_id in pn.connects_from:
            if from_id in real_ids:
                g.add_edge(from_id, pn.id, pseudo=True)
        for to_id in pn.connects_to:
            if to_id in real_ids:
                g.add_edge(pn.id, to_id, pseudo=True)

    return g, real_edges


def _boundaries(graph: nx.DiGraph) -> tuple[list[str], list[str]]:
    inputs: list[str] = []
    outputs: list[str] = []
    for node_id, data in graph.nodes(data="data"):
        if isinstance(data, Node):
            if data.is_input_boundary:
                inputs.append(node_id)
            elif data.is_output_boundary:
                outputs.append(node_id)
    return inputs, outputs


def compute_layout(
    nodes: Sequence[Node],
    edges: Iterable[Edge],
    pseudo_nodes: Sequence[PseudoNode] = (),
    excluded_edge_ids: Iterable[str] = (),
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Lay out the visible subgraph and find its back edges.

    Components are stacked top to bottom, largest first. Pseudo-nodes shape
    the layering but never appear in the returned positions. The returned
    back-edge set is geometric: an edge is a back edge iff its target does
    not sit strictly below its source.
    """
    config = config or LayoutConfig()
    if not nodes:
        return LayoutResult()

    graph, real_edges = build_layout_graph(nodes, edges, pseudo_nodes, excluded_edge_ids)
    components = find_components(graph)
    logger.debug(
        "layout: %d nodes, %d edges, %d components",
        graph.number_of_nodes(),
        len(real_edges),
        len(components),
    )

    positions: dict[str, LayoutPosition] = {}
    crossings = 0
    y_offset = config.top_margin

    for members in components:
        sub = component_graph(graph, members)
        inputs, outputs = _boundaries(sub)
        assignment = LayerAssignment.assign(sub, inputs, outputs, config.iteration_factor)
        ordering = minimise_crossings(sub, assignment.layers, config.sweeps)
        layer_ids = [assignment.layers[layer_nodes[0]] for layer_nodes in ordering]

        component_positions, y_offset = assign_coordinates(ordering, layer_ids, y_offset, config)
        positions.update(component_positions)
        crossings += count_crossings(ordering, sub)

    back_edges = find_back_edges(real_edges, positions)

    pseudo_ids = {pn.id for pn in pseudo_nodes}
    visible_positions = {nid: pos for nid, pos in positions.items() if nid not in pseudo_ids}

    return LayoutResult(positions=visible_positions, back_edges=back_edges, crossings=crossings)


def layout_visible(
    graph: GraphModel,
    module_ids: Iterable[str] | None = None,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Lay out the modules in ``module_ids``, bridging hidden modules.

    With ``module_ids=None`` the whole model is laid out and no pseudo-nodes
    are needed.
    """
    if module_ids is None:
        nodes, edges = graph.visible()
        return compute_layout(nodes, edges, config=config)

    nodes, edges = graph.visible(module_ids)
    bridges = find_pseudo_nodes(nodes, graph.nodes, graph.edges)
    return compute_layout(nodes, edges, bridges.pseudo_nodes, bridges.excluded_edges, config)
