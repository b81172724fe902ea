"""Layer assignment — longest path from sources, tolerant of cycles.

Every node of a component gets exactly one non-negative layer. Nodes are
processed from a queue; a node is placed one layer past its deepest placed
predecessor once all its predecessors are placed. Cycles are broken by
forcing placement after the queue has cycled through the component once;
the edges from predecessors that were still unplaced at that moment become
back edges. Each node carries an explicit ``NodeState`` so the rule can be
checked without looking at queue mechanics.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from enum import Enum

import networkx as nx

from mechnet.log import get_logger

logger = get_logger(__name__)

DEFAULT_ITERATION_FACTOR = 10


class NodeState(Enum):
    UNVISITED = "unvisited"
    QUEUED = "queued"
    ASSIGNED = "assigned"


def ready_to_assign(assigned_preds: int, unassigned_preds: int, iteration: int, size: int) -> bool:
    """Decide whether a dequeued node is placed now or requeued.

    A node is placed when none of its predecessors is waiting. Once the
    iteration counter exceeds the component size the node is placed anyway,
    provided at least one predecessor already has a layer to build on.
    """
    if unassigned_preds == 0:
        return True
    return iteration > size and assigned_preds > 0


class LayerAssignment:
    """Result of layer assignment for one component.

    Attributes:
        layers:     Maps node id → layer (≥ 0).
        states:     Final ``NodeState`` of every node. Nodes placed by the
                    post-cap fallback stay ``QUEUED`` or ``UNVISITED`` here.
        back_edges: (src, tgt) pairs recorded while breaking cycles.
        forced:     Nodes placed before all their predecessors were.
        fallback:   Nodes still unplaced when the iteration cap was hit.
        iterations: Queue pops performed.
    """

    def __init__(
        self,
        layers: dict[str, int],
        states: dict[str, NodeState],
        back_edges: set[tuple[str, str]],
        forced: list[str],
        fallback: list[str],
        iterations: int,
    ) -> None:
        self.layers = layers
        self.states = states
        self.back_edges = back_edges
        self.forced = forced
        self.fallback = fallback
        self.iterations = iterations

    @property
    def layer_count(self) -> int:
        return (max(self.layers.values()) + 1) if self.layers else 0

    @classmethod
    def assign(
        cls,
        graph: nx.DiGraph,
        input_boundaries: Iterable[str] = (),
        output_boundaries: Iterable[str] = (),
        iteration_factor: int = DEFAULT_ITERATION_FACTOR,
    ) -> LayerAssignment:
        """Assign layers to every node of a single connected component.

        Args:
            graph:             The component; every edge is in-component.
            input_boundaries:  Nodes pinned to layer 0. When any are present,
                               the other sources start at layer 1.
            output_boundaries: Nodes moved one layer past the deepest layer of
                               the component once layering is done.
            iteration_factor:  Queue pops are capped at ``factor × size``.
        """
        members: list[str] = list(graph.nodes)
        size = len(members)
        layers: dict[str, int] = {}
        states: dict[str, NodeState] = {n: NodeState.UNVISITED for n in members}
        back_edges: set[tuple[str, str]] = set()
        forced: list[str] = []

        if size == 0:
            return cls(layers, states, back_edges, forced, [], 0)

        inputs = [n for n in input_boundaries if n in states]
        outputs = {n for n in output_boundaries if n in states}
        input_set = set(inputs)

        sources = [n for n in members if graph.in_degree(n) == 0]
        for node_id in inputs:
            if node_id not in sources:
                sources.append(node_id)
        if not sources:
            # Pure cycle: enter at the node with the fewest predecessors.
            sources.append(min(members, key=graph.in_degree))

        source_layer = 1 if inputs else 0
        for node_id in sources:
            layers[node_id] = 0 if node_id in input_set else source_layer
            states[node_id] = NodeState.ASSIGNED

        queue: deque[str] = deque()

        def expand(node_id: str) -> None:
            for succ in graph.successors(node_id):
                if states[succ] is NodeState.ASSIGNED:
                    back_edges.add((node_id, succ))
                elif states[succ] is NodeState.UNVISITED:
                    states[succ] = NodeState.QUEUED
                    queue.append(succ)

        for node_id in sources:
            expand(node_id)

        max_iterations = size * iteration_factor
        iterations = 0

        while queue and iterations < max_iterations:
            iterations += 1
            node_id = queue.popleft()

            preds = list(graph.predecessors(node_id))
            placed = [p for p in preds if states[p] is NodeState.ASSIGNED]
            waiting = [p for p in preds if states[p] is not NodeState.ASSIGNED]

            if not ready_to_assign(len(placed), len(waiting), iterations, size):
                queue.append(node_id)
                continue

            if waiting:
                forced.append(node_id)
                for pred in waiting:
                    back_edges.add((pred, node_id))
                logger.debug("cycle broken at %s (%d waiting predecessors)", node_id, len(waiting))

            layers[node_id] = max((layers[p] for p in placed), default=-1) + 1
            states[node_id] = NodeState.ASSIGNED
            expand(node_id)

        fallback = [n for n in members if n not in layers]
        if fallback:
            overflow = max(layers.values()) + 1
            for node_id in fallback:
                layers[node_id] = overflow
            logger.debug("iteration cap hit: %d nodes placed at layer %d", len(fallback), overflow)

        if outputs:
            output_layer = max(layers.values()) + 1
            for node_id in outputs:
                layers[node_id] = output_layer

        return cls(layers, states, back_edges, forced, fallback, iterations)
