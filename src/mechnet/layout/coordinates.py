"""Coordinate assignment and geometric back-edge detection.

Layers flow top to bottom: a layer owns a horizontal band, and its nodes are
spread left to right in intra-layer order. A layer holding more nodes than
fit in one row wraps into extra sub-rows stacked inside its band, each
sub-row centred in the container.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mechnet.config import LayoutConfig
from mechnet.layout.types import LayoutPosition


def assign_coordinates(
    ordering: Sequence[Sequence[str]],
    layer_ids: Sequence[int],
    y_offset: float,
    config: LayoutConfig,
) -> tuple[dict[str, LayoutPosition], float]:
    """Place one component's nodes starting at ``y_offset``.

    Args:
        ordering:  Nodes of each layer in final intra-layer order.
        layer_ids: Layer number of each entry of ``ordering``.
        y_offset:  Top of this component's vertical band.
        config:    Geometry settings.

    Returns:
        ``(positions, next_offset)`` where ``next_offset`` is the top of the
        next component: the bottom of this one plus ``component_gap``.
    """
    per_row = config.nodes_per_row
    spacing = config.node_spacing
    positions: dict[str, LayoutPosition] = {}

    current_y = y_offset
    bottom = y_offset

    for layer, layer_nodes in zip(layer_ids, ordering):
        if not layer_nodes:
            continue
        num_rows = -(-len(layer_nodes) // per_row)

        for idx, node_id in enumerate(layer_nodes):
            row, col = divmod(idx, per_row)
            in_row = min(per_row, len(layer_nodes) - row * per_row)
            row_width = in_row * spacing - config.node_gap
            start_x = max(config.min_x, (config.container_width - row_width) / 2)

            y = current_y + row * config.row_height
            positions[node_id] = LayoutPosition(layer=layer, order=idx, x=start_x + col * spacing, y=y)
            bottom = max(bottom, y + config.row_height)

        current_y += num_rows * config.row_height + (config.layer_height - config.row_height)

    return positions, bottom + config.component_gap


def find_back_edges(
    edges: Iterable[tuple[str, str, str]],
    positions: dict[str, LayoutPosition],
) -> set[str]:
    """Return ids of edges whose target is not strictly below their source.

    ``edges`` yields ``(source, target, edge_id)``. Edges with an unplaced
    endpoint are ignored.
    """
    back: set[str] = set()
    for src, tgt, edge_id in edges:
        src_pos = positions.get(src)
        tgt_pos = positions.get(tgt)
        if src_pos is None or tgt_pos is None:
            continue
        if tgt_pos.y <= src_pos.y:
            back.add(edge_id)
    return back
