"""Shared networks for the mechnet test suite."""

from __future__ import annotations

import pytest

from mechnet.graph import (
    Edge,
    FeedbackLoop,
    GraphModel,
    LoopType,
    Module,
    Node,
    Relation,
    State,
    Stock,
)

# ─── Helpers ──────────────────────────────────────────────────────────────────


def _node(node_id: str, module_id: str) -> Node:
    return Node(id=node_id, label=node_id.upper(), kind=Stock(), subtype="protein", module_id=module_id)


def _edge(edge_id: str, source: str, target: str, module_id: str) -> Edge:
    return Edge(id=edge_id, source=source, target=target, relation=Relation.INCREASES, module_id=module_id)


# ─── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def chain_graph() -> GraphModel:
    """a → b → c → d → e across modules M01, M01, M02, M02, M03."""
    modules = ["M01", "M01", "M02", "M02", "M03"]
    ids = ["a", "b", "c", "d", "e"]
    nodes = tuple(_node(node_id, module) for node_id, module in zip(ids, modules))
    edges = tuple(
        _edge(f"edge_{i + 1}", ids[i], ids[i + 1], modules[i]) for i in range(len(ids) - 1)
    )
    return GraphModel(
        nodes=nodes,
        edges=edges,
        modules=(Module("M01", "Insulin signalling"), Module("M02", "mTOR"), Module("M03", "Autophagy")),
    )


@pytest.fixture
def loop_graph() -> GraphModel:
    """Reinforcing 3-cycle loop_a → loop_b → loop_c → loop_a plus an isolated node."""
    nodes = (
        _node("loop_a", "M01"),
        _node("loop_b", "M01"),
        _node("loop_c", "M01"),
        Node(id="isolated", label="Isolated", kind=State(), subtype="phenotype", module_id="M02"),
    )
    edges = (
        _edge("loop_edge_1", "loop_a", "loop_b", "M01"),
        _edge("loop_edge_2", "loop_b", "loop_c", "M01"),
        _edge("loop_edge_3", "loop_c", "loop_a", "M01"),
    )
    loop = FeedbackLoop(
        id="loop_1",
        name="Test reinforcing loop",
        type=LoopType.REINFORCING,
        edge_ids=("loop_edge_1", "loop_edge_2", "loop_edge_3"),
        module_ids=frozenset({"M01"}),
    )
    return GraphModel(nodes=nodes, edges=edges, feedback_loops=(loop,))
