"""Layered layout pipeline: components → layers → ordering → coordinates."""

from mechnet.layout.components import component_graph, find_components, find_pseudo_nodes
from mechnet.layout.coordinates import assign_coordinates, find_back_edges
from mechnet.layout.layering import LayerAssignment, NodeState, ready_to_assign
from mechnet.layout.ordering import count_crossings, initial_ordering, minimise_crossings
from mechnet.layout.pipeline import build_layout_graph, compute_layout, layout_visible
from mechnet.layout.types import PSEUDO_PREFIX, LayoutPosition, LayoutResult, PseudoNode, PseudoNodeResult

__all__ = [
    "PSEUDO_PREFIX",
    "LayerAssignment",
    "LayoutPosition",
    "LayoutResult",
    "NodeState",
    "PseudoNode",
    "PseudoNodeResult",
    "assign_coordinates",
    "build_layout_graph",
    "component_graph",
    "compute_layout",
    "count_crossings",
    "find_back_edges",
    "find_components",
    "find_pseudo_nodes",
    "initial_ordering",
    "layout_visible",
    "minimise_crossings",
    "ready_to_assign",
]
