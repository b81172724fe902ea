"""Tests for layout/ordering.py — initial ordering, barycenter sweeps and crossing count."""

from __future__ import annotations

import networkx as nx

from mechnet.graph import Boundary, Node, State, Stock
from mechnet.layout.ordering import count_crossings, initial_ordering, minimise_crossings
from mechnet.layout.types import PseudoNode

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_graph(*edges: tuple[str, str]) -> nx.DiGraph:
    """Build a DiGraph from a list of (src, tgt) string pairs."""
    g: nx.DiGraph = nx.DiGraph()
    for src, tgt in edges:
        g.add_edge(src, tgt)
    return g


def make_graph_nodes(*nodes: str) -> nx.DiGraph:
    """Build a DiGraph with only nodes (no edges)."""
    g: nx.DiGraph = nx.DiGraph()
    for node in nodes:
        g.add_node(node)
    return g


def add_network_node(g: nx.DiGraph, node_id: str, module_id: str, kind) -> None:
    g.add_node(node_id, data=Node(id=node_id, label=node_id, kind=kind, subtype="", module_id=module_id))


# ─── count_crossings Tests ────────────────────────────────────────────────────


class TestCountCrossings:
    def test_no_crossings_simple_chain(self):
        """A → B with A in layer 0 and B in layer 1 — zero crossings."""
        g = make_graph(("A", "B"))
        assert count_crossings([["A"], ["B"]], g) == 0

    def test_no_crossings_parallel(self):
        """Two parallel edges (A→C, B→D) with natural ordering — zero crossings."""
        g = make_graph(("A", "C"), ("B", "D"))
        assert count_crossings([["A", "B"], ["C", "D"]], g) == 0

    def test_one_crossing(self):
        """A→D and B→C with A before B in layer 0 — one crossing because D after C."""
        g = make_graph(("A", "D"), ("B", "C"))
        assert count_crossings([["A", "B"], ["C", "D"]], g) == 1

    def test_complete_bipartite(self):
        """K(2,2) between two layers always has exactly one crossing."""
        g = make_graph(("A", "C"), ("A", "D"), ("B", "C"), ("B", "D"))
        assert count_crossings([["A", "B"], ["C", "D"]], g) == 1

    def test_empty_graph_no_crossings(self):
        assert count_crossings([], nx.DiGraph()) == 0

    def test_single_layer_no_crossings(self):
        g = make_graph_nodes("A", "B")
        assert count_crossings([["A", "B"]], g) == 0

    def test_non_adjacent_layers_ignored(self):
        """An edge skipping a layer is not counted."""
        g = make_graph(("A", "D"), ("B", "C"))
        assert count_crossings([["A", "B"], ["X"], ["C", "D"]], g) == 0

    def test_crossing_reduces_with_swap(self):
        """Swapping layer 1 node order should reduce crossings from 1 to 0."""
        g = make_graph(("A", "D"), ("B", "C"))
        assert count_crossings([["A", "B"], ["C", "D"]], g) == 1
        assert count_crossings([["A", "B"], ["D", "C"]], g) == 0


# ─── initial_ordering Tests ───────────────────────────────────────────────────


class TestInitialOrdering:
    def test_module_then_category(self):
        """Sorted by module id, then boundary < state < stock."""
        g: nx.DiGraph = nx.DiGraph()
        add_network_node(g, "stock1", "M01", Stock())
        add_network_node(g, "bound1", "M01", Boundary())
        add_network_node(g, "state1", "M01", State())
        add_network_node(g, "early", "M00", Stock())
        layers = {n: 0 for n in g.nodes}
        assert initial_ordering(g, layers) == [["early", "bound1", "state1", "stock1"]]

    def test_pseudo_node_sorts_with_states(self):
        g: nx.DiGraph = nx.DiGraph()
        add_network_node(g, "stock", "M02", Stock())
        g.add_node("__pseudo_M02", data=PseudoNode.for_module("M02", (), ()))
        add_network_node(g, "bound", "M02", Boundary())
        layers = {n: 0 for n in g.nodes}
        assert initial_ordering(g, layers) == [["bound", "__pseudo_M02", "stock"]]

    def test_empty_layers_skipped(self):
        g = make_graph_nodes("A", "B")
        assert initial_ordering(g, {"A": 0, "B": 2}) == [["A"], ["B"]]

    def test_ties_keep_graph_order(self):
        g = make_graph_nodes("Z", "A", "M")
        assert initial_ordering(g, {"Z": 0, "A": 0, "M": 0}) == [["Z", "A", "M"]]


# ─── minimise_crossings Tests ─────────────────────────────────────────────────


class TestMinimiseCrossings:
    def test_returns_all_nodes(self):
        """minimise_crossings returns all nodes, none missing or duplicated."""
        g = make_graph(("A", "B"), ("A", "C"))
        result = minimise_crossings(g, {"A": 0, "B": 1, "C": 1})
        all_ids = {nid for layer in result for nid in layer}
        assert all_ids == {"A", "B", "C"}

    def test_layer_count_matches(self):
        g = make_graph(("A", "B"), ("B", "C"))
        result = minimise_crossings(g, {"A": 0, "B": 1, "C": 2})
        assert len(result) == 3

    def test_each_node_in_correct_layer(self):
        """Every node appears in the layer matching its assignment."""
        layers = {"A": 0, "B": 1, "C": 1, "D": 2}
        g = make_graph(("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"))
        result = minimise_crossings(g, layers)
        for node_id, expected_layer in layers.items():
            assert node_id in result[expected_layer], f"{node_id} should be in layer {expected_layer}"

    def test_removes_simple_crossing(self):
        """A→D, B→C starting crossed — barycenter untangles it."""
        g = make_graph_nodes("A", "B", "C", "D")
        g.add_edge("A", "D")
        g.add_edge("B", "C")
        layers = {"A": 0, "B": 0, "C": 1, "D": 1}
        assert count_crossings(initial_ordering(g, layers), g) == 1
        result = minimise_crossings(g, layers)
        assert count_crossings(result, g) == 0

    def test_crossings_not_worse_after_minimise(self):
        edges = [("A", "E"), ("B", "D"), ("C", "D"), ("A", "F"), ("C", "E")]
        g = make_graph_nodes("A", "B", "C", "D", "E", "F")
        for src, tgt in edges:
            g.add_edge(src, tgt)
        layers = {"A": 0, "B": 0, "C": 0, "D": 1, "E": 1, "F": 1}
        before = count_crossings(initial_ordering(g, layers), g)
        after = count_crossings(minimise_crossings(g, layers), g)
        assert after <= before, f"minimise_crossings worsened crossings: {before} → {after}"

    def test_zero_sweeps_keeps_initial_order(self):
        g = make_graph_nodes("A", "B", "C", "D")
        g.add_edge("A", "D")
        g.add_edge("B", "C")
        layers = {"A": 0, "B": 0, "C": 1, "D": 1}
        assert minimise_crossings(g, layers, sweeps=0) == [["A", "B"], ["C", "D"]]

    def test_empty_graph(self):
        assert minimise_crossings(nx.DiGraph(), {}) == []

    def test_single_node_single_layer(self):
        g = make_graph_nodes("A")
        assert minimise_crossings(g, {"A": 0}) == [["A"]]

    def test_no_duplicates_in_layers(self):
        """No node should appear in more than one layer after minimisation."""
        layers = {"A": 0, "B": 1, "C": 1, "D": 2, "E": 2}
        g = make_graph(("A", "B"), ("A", "C"), ("B", "D"), ("C", "E"))
        result = minimise_crossings(g, layers)
        all_ids = [nid for layer in result for nid in layer]
        assert len(all_ids) == len(set(all_ids)), "Each node must appear exactly once"

    def test_deterministic(self):
        layers = {"A": 0, "B": 0, "C": 1, "D": 1, "E": 2}
        edges = [("A", "D"), ("B", "C"), ("C", "E"), ("D", "E")]
        assert minimise_crossings(make_graph(*edges), layers) == minimise_crossings(make_graph(*edges), layers)
