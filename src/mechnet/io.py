"""Dataset loading and result serialisation.

Datasets use the camelCase JSON shape of the network curation files:

    {
      "modules":       [{"id", "name", "shortName"?}],
      "nodes":         [{"id", "label", "category", "subtype", "moduleId",
                         "boundaryDirection"?, "variants"?}],
      "edges":         [{"id", "source", "target", "relation", "moduleId",
                         "causalConfidence"?, "evidence"?}],
      "feedbackLoops": [{"id", "name", "type", "edgeIds", "moduleIds"?}],
      "drugs":         [{"id", "name", "primaryTargets": [{"nodeId", "effect", "strength"?}]}]
    }

Only ``nodes`` is required. Referential integrity between records is not
checked here: edges may name unknown nodes and are dropped downstream.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from mechnet.errors import DatasetError
from mechnet.graph import (
    Boundary,
    BoundaryDirection,
    BoundaryVariant,
    CausalConfidence,
    DrugLibraryEntry,
    DrugTarget,
    Edge,
    EffectDirection,
    EffectStrength,
    Evidence,
    FeedbackLoop,
    GraphModel,
    LoopType,
    Module,
    Node,
    NodeCategory,
    NodeKind,
    Relation,
    State,
    Stock,
    TargetEffect,
)
from mechnet.layout.types import LayoutResult
from mechnet.log import get_logger
from mechnet.pathway.stats import PathwayConfig, PathwayStats

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


# ─── Field helpers ────────────────────────────────────────────────────────────


def _require(record: Mapping[str, Any], key: str, what: str) -> Any:
    if key not in record:
        ident = record.get("id", "?")
        raise DatasetError(f"{what} {ident!r} is missing required field {key!r}")
    return record[key]


def _enum(cls: type[E], value: Any, what: str) -> E:
    try:
        return cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in cls)
        raise DatasetError(f"Unknown {what} {value!r} (expected one of: {allowed})") from None


# ─── Record parsers ───────────────────────────────────────────────────────────


def _parse_variant(raw: Mapping[str, Any]) -> BoundaryVariant:
    frequency = raw.get("frequency")
    return BoundaryVariant(
        id=_require(raw, "id", "variant"),
        label=raw.get("label", raw["id"]),
        effect_direction=_enum(EffectDirection, raw.get("effectDirection", "neutral"), "effect direction"),
        effect_magnitude=float(raw.get("effectMagnitude", 1.0)),
        frequency=float(frequency) if frequency is not None else None,
    )


def _parse_kind(raw: Mapping[str, Any]) -> NodeKind:
    category = _enum(NodeCategory, _require(raw, "category", "node"), "node category")
    if category is NodeCategory.STOCK:
        return Stock()
    if category is NodeCategory.STATE:
        return State()

    direction = raw.get("boundaryDirection")
    return Boundary(
        direction=_enum(BoundaryDirection, direction, "boundary direction") if direction else None,
        variants=tuple(_parse_variant(v) for v in raw.get("variants", ())),
    )


def parse_node(raw: Mapping[str, Any]) -> Node:
    node_id = _require(raw, "id", "node")
    return Node(
        id=node_id,
        label=raw.get("label", node_id),
        kind=_parse_kind(raw),
        subtype=raw.get("subtype", ""),
        module_id=_require(raw, "moduleId", "node"),
    )


def _parse_evidence(raw: Mapping[str, Any]) -> Evidence:
    return Evidence(
        first_author=raw.get("firstAuthor", ""),
        year=int(raw.get("year", 0)),
        method_type=raw.get("methodType", ""),
        causal_confidence=_enum(CausalConfidence, raw.get("causalConfidence", "L4"), "causal confidence"),
        pmid=raw.get("pmid"),
        doi=raw.get("doi"),
    )


def parse_edge(raw: Mapping[str, Any]) -> Edge:
    return Edge(
        id=_require(raw, "id", "edge"),
        source=_require(raw, "source", "edge"),
        target=_require(raw, "target", "edge"),
        relation=_enum(Relation, raw.get("relation", "increases"), "relation"),
        module_id=raw.get("moduleId", ""),
        causal_confidence=_enum(CausalConfidence, raw.get("causalConfidence", "L4"), "causal confidence"),
        evidence=tuple(_parse_evidence(e) for e in raw.get("evidence", ())),
    )


def parse_feedback_loop(raw: Mapping[str, Any]) -> FeedbackLoop:
    return FeedbackLoop(
        id=_require(raw, "id", "feedback loop"),
        name=raw.get("name", raw["id"]),
        type=_enum(LoopType, _require(raw, "type", "feedback loop"), "loop type"),
        edge_ids=tuple(_require(raw, "edgeIds", "feedback loop")),
        module_ids=frozenset(raw.get("moduleIds", ())),
    )


def parse_drug_target(raw: Mapping[str, Any]) -> DrugTarget:
    return DrugTarget(
        node_id=_require(raw, "nodeId", "drug target"),
        effect=_enum(TargetEffect, _require(raw, "effect", "drug target"), "target effect"),
        strength=_enum(EffectStrength, raw.get("strength", "moderate"), "effect strength"),
    )


def parse_drug(raw: Mapping[str, Any]) -> DrugLibraryEntry:
    return DrugLibraryEntry(
        id=_require(raw, "id", "drug"),
        name=raw.get("name", raw["id"]),
        primary_targets=tuple(parse_drug_target(t) for t in raw.get("primaryTargets", ())),
    )


def graph_from_dict(data: Mapping[str, Any]) -> GraphModel:
    """Build a ``GraphModel`` from a parsed dataset mapping.

    Raises:
        DatasetError: on a missing required field, an unknown enum value or a
            duplicate node id.
    """
    if not isinstance(data, Mapping):
        raise DatasetError("Dataset must be a JSON object")
    if "nodes" not in data:
        raise DatasetError("Dataset has no 'nodes' list")

    graph = GraphModel(
        nodes=tuple(parse_node(n) for n in data["nodes"]),
        edges=tuple(parse_edge(e) for e in data.get("edges", ())),
        modules=tuple(
            Module(id=_require(m, "id", "module"), name=m.get("name", m["id"]), short_name=m.get("shortName", ""))
            for m in data.get("modules", ())
        ),
        feedback_loops=tuple(parse_feedback_loop(loop) for loop in data.get("feedbackLoops", ())),
        drugs=tuple(parse_drug(d) for d in data.get("drugs", ())),
    )
    logger.debug(
        "dataset: %d nodes, %d edges, %d loops, %d drugs",
        len(graph.nodes),
        len(graph.edges),
        len(graph.feedback_loops),
        len(graph.drugs),
    )
    return graph


def load_graph(path: str | Path) -> GraphModel:
    """Read a JSON dataset file and build its ``GraphModel``."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Invalid JSON in {path}: {exc}") from exc
    return graph_from_dict(data)


def parse_target(text: str) -> DrugTarget:
    """Parse ``NODE[:EFFECT[:STRENGTH]]`` into a ``DrugTarget``.

    The effect defaults to ``inhibits`` and the strength to ``moderate``.
    """
    parts = text.split(":")
    if not parts[0] or len(parts) > 3:
        raise DatasetError(f"Invalid target {text!r}, expected NODE[:EFFECT[:STRENGTH]]")
    effect = _enum(TargetEffect, parts[1], "target effect") if len(parts) > 1 else TargetEffect.INHIBITS
    strength = _enum(EffectStrength, parts[2], "effect strength") if len(parts) > 2 else EffectStrength.MODERATE
    return DrugTarget(node_id=parts[0], effect=effect, strength=strength)


# ─── Result serialisation ─────────────────────────────────────────────────────


def layout_to_dict(result: LayoutResult) -> dict[str, Any]:
    return {
        "positions": {
            node_id: {"layer": pos.layer, "order": pos.order, "x": pos.x, "y": pos.y}
            for node_id, pos in result.positions.items()
        },
        "backEdges": sorted(result.back_edges),
        "crossings": result.crossings,
    }


def pathway_config_to_dict(config: PathwayConfig) -> dict[str, Any]:
    return {
        "drugId": config.drug_id,
        "upstreamNodes": list(config.upstream_nodes),
        "targetNodes": list(config.target_nodes),
        "downstreamNodes": list(config.downstream_nodes),
        "pathwayEdges": list(config.pathway_edges),
        "relevantLoops": [
            {
                "loopId": loop.loop_id,
                "involvement": loop.involvement.value,
                "targetNodeInLoop": loop.target_node_in_loop,
            }
            for loop in config.relevant_loops
        ],
        "affectedModules": list(config.affected_modules),
        "computedAt": config.computed_at,
    }


def stats_to_dict(stats: PathwayStats) -> dict[str, int]:
    return {
        "totalNodes": stats.total_nodes,
        "upstreamCount": stats.upstream_count,
        "targetCount": stats.target_count,
        "downstreamCount": stats.downstream_count,
        "edgeCount": stats.edge_count,
        "moduleCount": stats.module_count,
        "loopCount": stats.loop_count,
        "loopsBreaking": stats.loops_breaking,
        "loopsWeakening": stats.loops_weakening,
        "loopsStrengthening": stats.loops_strengthening,
    }
