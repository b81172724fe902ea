"""Layout configuration.

``LayoutConfig`` collects the geometry constants used to turn layers and
intra-layer orders into coordinates, plus the iteration bounds of the
layering and crossing-minimisation phases. Values can be loaded from YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from mechnet.errors import ConfigError

DEFAULT_MAX_DEPTH: int = 5


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry and iteration bounds for ``compute_layout``.

    Layers run top to bottom: each layer gets a vertical band and its nodes
    are spread horizontally, wrapping into sub-rows once a row is full.

    Attributes:
        container_width:   Width available for one sub-row.
        node_width:        Width of a node box.
        node_gap:          Horizontal gap between nodes of a sub-row.
        min_x:             Left margin; rows never start left of it.
        layer_height:      Vertical band of a single-row layer.
        row_height:        Vertical step between sub-rows of one layer.
        component_gap:     Vertical gap between stacked components.
        top_margin:        y of the first component.
        sweeps:            Barycenter sweep iterations (forward + backward).
        max_nodes_per_row: Explicit sub-row capacity; ``None`` derives it
                           from the width settings.
        iteration_factor:  Layering gives up after ``factor × size`` steps.
    """

    container_width: float = 380
    node_width: float = 180
    node_gap: float = 10
    min_x: float = 50
    layer_height: float = 90
    row_height: float = 70
    component_gap: float = 120
    top_margin: float = 50
    sweeps: int = 10
    max_nodes_per_row: int | None = None
    iteration_factor: int = 10

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in ("min_x", "top_margin", "node_gap"):
                if value < 0:
                    raise ConfigError(f"{f.name} must be >= 0, got {value!r}")
            elif f.name == "sweeps":
                if value < 0:
                    raise ConfigError(f"sweeps must be >= 0, got {value!r}")
            elif value <= 0:
                raise ConfigError(f"{f.name} must be > 0, got {value!r}")

    @property
    def node_spacing(self) -> float:
        """Horizontal distance between the left edges of neighbouring nodes."""
        return self.node_width + self.node_gap

    @property
    def nodes_per_row(self) -> int:
        """How many nodes fit in one sub-row."""
        if self.max_nodes_per_row is not None:
            return self.max_nodes_per_row
        return max(1, int((self.container_width + self.node_gap) // self.node_spacing))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LayoutConfig:
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown layout config keys: {', '.join(unknown)}")
        return cls(**dict(data))


def load_layout_config(config_path: str | Path) -> LayoutConfig:
    """Load a ``LayoutConfig`` from a YAML file.

    The file may hold the settings at top level or under a ``layout`` key.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping: {config_path}")
    if "layout" in data:
        data = data["layout"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"'layout' section must be a mapping: {config_path}")

    return LayoutConfig.from_mapping(data)
