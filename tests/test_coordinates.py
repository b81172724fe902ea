"""Tests for layout/coordinates.py — row wrapping, layer stacking and back edges."""

from __future__ import annotations

from mechnet.config import LayoutConfig
from mechnet.layout.coordinates import assign_coordinates, find_back_edges
from mechnet.layout.types import LayoutPosition

# Default geometry: node spacing 190, two nodes per sub-row.
CONFIG = LayoutConfig()


class TestAssignCoordinates:
    def test_single_node_centred(self):
        """One 180-wide node in a 380-wide container starts at x=100."""
        positions, _ = assign_coordinates([["a"]], [0], 50, CONFIG)
        assert positions["a"] == LayoutPosition(layer=0, order=0, x=100, y=50)

    def test_full_row_clamped_to_min_x(self):
        """Two nodes span 370, so the row starts at min_x rather than x=5."""
        positions, _ = assign_coordinates([["a", "b"]], [0], 50, CONFIG)
        assert positions["a"].x == 50
        assert positions["b"].x == 240
        assert positions["a"].y == positions["b"].y == 50

    def test_wraps_into_sub_rows(self):
        """Three nodes in one layer — third node wraps onto a second, centred sub-row."""
        positions, _ = assign_coordinates([["a", "b", "c"]], [0], 50, CONFIG)
        assert (positions["a"].x, positions["a"].y) == (50, 50)
        assert (positions["b"].x, positions["b"].y) == (240, 50)
        assert (positions["c"].x, positions["c"].y) == (100, 120)
        assert positions["c"].order == 2

    def test_layers_stack_downward(self):
        """Each single-row layer takes layer_height of vertical space."""
        positions, _ = assign_coordinates([["a"], ["b"], ["c"]], [0, 1, 2], 50, CONFIG)
        assert [positions[n].y for n in "abc"] == [50, 140, 230]
        assert [positions[n].layer for n in "abc"] == [0, 1, 2]

    def test_wrapped_layer_pushes_next_layer(self):
        """A two-row layer shifts the following layer down by one extra row."""
        positions, _ = assign_coordinates([["a", "b", "c"], ["d"]], [0, 1], 50, CONFIG)
        assert positions["d"].y == 50 + 2 * 70 + 20

    def test_next_offset(self):
        """Next component starts below this one's bottom plus component_gap."""
        _, next_offset = assign_coordinates([["a"], ["b"]], [0, 1], 50, CONFIG)
        assert next_offset == 140 + 70 + 120

    def test_layer_ids_passed_through(self):
        positions, _ = assign_coordinates([["a"], ["b"]], [0, 3], 0, CONFIG)
        assert positions["b"].layer == 3

    def test_explicit_row_capacity(self):
        config = LayoutConfig(max_nodes_per_row=1)
        positions, _ = assign_coordinates([["a", "b"]], [0], 0, config)
        assert positions["a"].y == 0
        assert positions["b"].y == 70
        assert positions["a"].x == positions["b"].x == 100

    def test_empty_ordering(self):
        positions, next_offset = assign_coordinates([], [], 50, CONFIG)
        assert positions == {}
        assert next_offset == 50 + 120


class TestFindBackEdges:
    def test_downward_edge_is_forward(self):
        positions = {"a": LayoutPosition(0, 0, 100, 50), "b": LayoutPosition(1, 0, 100, 140)}
        assert find_back_edges([("a", "b", "e1")], positions) == set()

    def test_upward_edge_is_back(self):
        positions = {"a": LayoutPosition(0, 0, 100, 50), "b": LayoutPosition(1, 0, 100, 140)}
        assert find_back_edges([("b", "a", "e2")], positions) == {"e2"}

    def test_same_row_is_back(self):
        """Target at the same y as the source counts as a back edge."""
        positions = {"a": LayoutPosition(0, 0, 50, 50), "c": LayoutPosition(0, 1, 240, 50)}
        assert find_back_edges([("a", "c", "e3")], positions) == {"e3"}

    def test_unplaced_endpoint_ignored(self):
        positions = {"a": LayoutPosition(0, 0, 100, 50)}
        assert find_back_edges([("a", "ghost", "e4"), ("ghost", "a", "e5")], positions) == set()
