"""Feedback-loop involvement of an intervention."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from mechnet.graph import DrugTarget, Edge, FeedbackLoop, LoopType, TargetEffect
from mechnet.pathway.traversal import PathwayResult


class Involvement(str, Enum):
    BREAKS = "breaks"
    STRENGTHENS = "strengthens"
    WEAKENS = "weakens"


@dataclass(frozen=True)
class LoopInvolvement:
    loop_id: str
    involvement: Involvement
    target_node_in_loop: str


# Inhibiting a node of a reinforcing loop stops the loop from amplifying
# itself; inhibiting a balancing loop only dampens its correction.
_INVOLVEMENT: dict[tuple[LoopType, TargetEffect], Involvement] = {
    (LoopType.REINFORCING, TargetEffect.INHIBITS): Involvement.BREAKS,
    (LoopType.REINFORCING, TargetEffect.ACTIVATES): Involvement.STRENGTHENS,
    (LoopType.REINFORCING, TargetEffect.MODULATES): Involvement.WEAKENS,
    (LoopType.BALANCING, TargetEffect.INHIBITS): Involvement.WEAKENS,
    (LoopType.BALANCING, TargetEffect.ACTIVATES): Involvement.STRENGTHENS,
    (LoopType.BALANCING, TargetEffect.MODULATES): Involvement.WEAKENS,
}


def classify_involvement(effect: TargetEffect, loop_type: LoopType) -> Involvement:
    """How a target effect on a loop member changes the loop."""
    return _INVOLVEMENT[(loop_type, effect)]


def analyze_loop_involvement(
    targets: Sequence[DrugTarget],
    pathway: PathwayResult,
    loops: Iterable[FeedbackLoop],
    edges: Iterable[Edge],
) -> list[LoopInvolvement]:
    """Classify each feedback loop touched by the pathway and containing a target.

    A loop is reported when at least one of its edges is a pathway edge and
    one of the targets is an endpoint of one of its edges. Loops without a
    target member are left out. When several targets sit in one loop, the
    last of them in ``targets`` order decides, so each loop is reported at
    most once. A node listed twice keeps its first position and its last
    effect. Results follow ``loops`` order.
    """
    edge_by_id = {e.id: e for e in edges}
    # Later entries for the same node overwrite the effect, not the position.
    by_node: dict[str, DrugTarget] = {t.node_id: t for t in targets}
    involvements: list[LoopInvolvement] = []

    for loop in loops:
        if pathway.pathway_edges.isdisjoint(loop.edge_ids):
            continue

        members: set[str] = set()
        for edge_id in loop.edge_ids:
            edge = edge_by_id.get(edge_id)
            if edge is not None:
                members.add(edge.source)
                members.add(edge.target)

        in_loop = [t for t in by_node.values() if t.node_id in members]
        if not in_loop:
            continue
        target = in_loop[-1]

        involvements.append(
            LoopInvolvement(
                loop_id=loop.id,
                involvement=classify_involvement(target.effect, loop.type),
                target_node_in_loop=target.node_id,
            )
        )

    return involvements
