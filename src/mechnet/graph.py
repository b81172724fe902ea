"""Graph model — immutable snapshot of the causal network plus its adjacency index.

A ``GraphModel`` is built once per dataset load by the host application and
passed by reference into every algorithm. Nothing in this module caches
derived data: ``build_adjacency_index`` allocates a fresh index per call.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from mechnet.errors import DatasetError

# ─── Enumerations ─────────────────────────────────────────────────────────────


class NodeCategory(str, Enum):
    STOCK = "STOCK"
    STATE = "STATE"
    BOUNDARY = "BOUNDARY"


class BoundaryDirection(str, Enum):
    INPUT = "input"
    OUTPUT = "output"


class EffectDirection(str, Enum):
    PROTECTIVE = "protective"
    NEUTRAL = "neutral"
    RISK = "risk"


class Relation(str, Enum):
    DIRECTLY_INCREASES = "directlyIncreases"
    DIRECTLY_DECREASES = "directlyDecreases"
    INCREASES = "increases"
    DECREASES = "decreases"
    REGULATES = "regulates"
    MODULATES = "modulates"
    CAUSES_NO_CHANGE = "causesNoChange"
    NO_CORRELATION = "noCorrelation"
    POSITIVE_CORRELATION = "positiveCorrelation"
    NEGATIVE_CORRELATION = "negativeCorrelation"
    ASSOCIATION = "association"


class CausalConfidence(str, Enum):
    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"
    L6 = "L6"
    L7 = "L7"


class LoopType(str, Enum):
    REINFORCING = "reinforcing"
    BALANCING = "balancing"


class TargetEffect(str, Enum):
    INHIBITS = "inhibits"
    ACTIVATES = "activates"
    MODULATES = "modulates"


class EffectStrength(str, Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


# ─── Node kinds ───────────────────────────────────────────────────────────────
#
# The category of a node is a tagged union fixed at construction: only the
# Boundary variant carries a direction and a list of named variants.


@dataclass(frozen=True)
class BoundaryVariant:
    """A named variant of a boundary input (e.g. an allele or an age band)."""

    id: str
    label: str
    effect_direction: EffectDirection
    effect_magnitude: float
    frequency: float | None = None


@dataclass(frozen=True)
class Stock:
    category = NodeCategory.STOCK


@dataclass(frozen=True)
class State:
    category = NodeCategory.STATE


@dataclass(frozen=True)
class Boundary:
    category = NodeCategory.BOUNDARY

    direction: BoundaryDirection | None = None
    variants: tuple[BoundaryVariant, ...] = ()


NodeKind = Stock | State | Boundary


# ─── Records ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Node:
    """A biological entity in the causal network."""

    id: str
    label: str
    kind: NodeKind
    subtype: str
    module_id: str

    @property
    def category(self) -> NodeCategory:
        return self.kind.category

    @property
    def is_input_boundary(self) -> bool:
        return isinstance(self.kind, Boundary) and self.kind.direction is BoundaryDirection.INPUT

    @property
    def is_output_boundary(self) -> bool:
        return isinstance(self.kind, Boundary) and self.kind.direction is BoundaryDirection.OUTPUT


@dataclass(frozen=True)
class Evidence:
    """A citation supporting an edge."""

    first_author: str
    year: int
    method_type: str
    causal_confidence: CausalConfidence
    pmid: str | None = None
    doi: str | None = None


@dataclass(frozen=True)
class Edge:
    """A directed causal relationship between two nodes."""

    id: str
    source: str
    target: str
    relation: Relation
    module_id: str
    causal_confidence: CausalConfidence = CausalConfidence.L4
    evidence: tuple[Evidence, ...] = ()


@dataclass(frozen=True)
class Module:
    id: str
    name: str
    short_name: str = ""


@dataclass(frozen=True)
class FeedbackLoop:
    """A named cycle of edges, in loop order."""

    id: str
    name: str
    type: LoopType
    edge_ids: tuple[str, ...]
    module_ids: frozenset[str] = frozenset()


@dataclass(frozen=True)
class DrugTarget:
    """One intervention target. ``strength`` is descriptive only."""

    node_id: str
    effect: TargetEffect
    strength: EffectStrength = EffectStrength.MODERATE


@dataclass(frozen=True)
class DrugLibraryEntry:
    id: str
    name: str
    primary_targets: tuple[DrugTarget, ...]


# ─── Graph model ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GraphModel:
    """Immutable snapshot of nodes, edges, modules and feedback loops.

    Node ids must be unique. Edges may reference unknown node ids; such
    edges are tolerated here and dropped whenever adjacency is built.
    """

    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...] = ()
    modules: tuple[Module, ...] = ()
    feedback_loops: tuple[FeedbackLoop, ...] = ()
    drugs: tuple[DrugLibraryEntry, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise DatasetError(f"Duplicate node id: {node.id!r}")
            seen.add(node.id)

    def adjacency(self) -> AdjacencyIndex:
        """Build a fresh adjacency index over the whole model."""
        return build_adjacency_index(self.nodes, self.edges)

    def visible(self, module_ids: Iterable[str] | None = None) -> tuple[list[Node], list[Edge]]:
        """Return the nodes in ``module_ids`` and the edges between them.

        ``None`` selects every module.
        """
        if module_ids is None:
            return list(self.nodes), [e for e in self.edges if _endpoints_known(e, self._ids())]
        selected = set(module_ids)
        nodes = [n for n in self.nodes if n.module_id in selected]
        ids = {n.id for n in nodes}
        return nodes, [e for e in self.edges if _endpoints_known(e, ids)]

    def _ids(self) -> set[str]:
        return {n.id for n in self.nodes}


def _endpoints_known(edge: Edge, ids: set[str]) -> bool:
    return edge.source in ids and edge.target in ids


# ─── Adjacency index ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AdjacencyIndex:
    """Outgoing/incoming neighbour lists plus an edge lookup.

    Attributes:
        outgoing:     node id → successor ids, in edge-insertion order.
        incoming:     node id → predecessor ids, in edge-insertion order.
        edge_by_pair: (source id, target id) → edge id. When several edges
                      share a pair the last one wins.
    """

    outgoing: dict[str, list[str]] = field(default_factory=dict)
    incoming: dict[str, list[str]] = field(default_factory=dict)
    edge_by_pair: dict[tuple[str, str], str] = field(default_factory=dict)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.outgoing


def build_adjacency_index(nodes: Sequence[Node], edges: Iterable[Edge]) -> AdjacencyIndex:
    """Build outgoing/incoming adjacency and the (source, target) → edge id lookup.

    Every node id becomes a key of both adjacency maps, in ``nodes`` order,
    even with an empty list. Edges whose source or target is not among
    ``nodes`` are skipped silently.
    """
    outgoing: dict[str, list[str]] = {n.id: [] for n in nodes}
    incoming: dict[str, list[str]] = {n.id: [] for n in nodes}
    edge_by_pair: dict[tuple[str, str], str] = {}

    for edge in edges:
        if edge.source not in outgoing or edge.target not in incoming:
            continue
        outgoing[edge.source].append(edge.target)
        incoming[edge.target].append(edge.source)
        edge_by_pair[(edge.source, edge.target)] = edge.id

    return AdjacencyIndex(outgoing=outgoing, incoming=incoming, edge_by_pair=edge_by_pair)
