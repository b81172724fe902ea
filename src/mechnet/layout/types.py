"""Layout IR types shared by the layout phases."""

from __future__ import annotations

from dataclasses import dataclass, field

PSEUDO_PREFIX = "__pseudo_"


@dataclass
class LayoutPosition:
    """A positioned node: its layer, its order within the layer, and (x, y)."""

    layer: int
    order: int
    x: float
    y: float


@dataclass(frozen=True)
class PseudoNode:
    """Stand-in for a hidden module that bridges visible parts of the graph.

    ``connects_from`` are the visible nodes feeding into the hidden module;
    ``connects_to`` are the entry points of the downstream visible module(s).
    """

    id: str
    module_id: str
    connects_from: tuple[str, ...]
    connects_to: tuple[str, ...]

    @classmethod
    def for_module(cls, module_id: str, connects_from: tuple[str, ...], connects_to: tuple[str, ...]) -> PseudoNode:
        return cls(
            id=f"{PSEUDO_PREFIX}{module_id}",
            module_id=module_id,
            connects_from=connects_from,
            connects_to=connects_to,
        )


@dataclass
class PseudoNodeResult:
    """Pseudo-nodes plus the ids of the real edges they replace."""

    pseudo_nodes: list[PseudoNode] = field(default_factory=list)
    excluded_edges: set[str] = field(default_factory=set)


@dataclass
class LayoutResult:
    """Final layout: positions of real nodes and the geometric back-edge set.

    ``crossings`` is the summed inversion count of the final per-component
    orderings, kept as a quality metric.
    """

    positions: dict[str, LayoutPosition] = field(default_factory=dict)
    back_edges: set[str] = field(default_factory=set)
    crossings: int = 0
