from __future__ import annotations

import itertools
import logging
import threading
from typing import List, Optional, Tuple, Union

import networkx as nx

from dagbuilder.config.settings import StoreConfig
from dagbuilder.graph.cycle_oracle import introduces_cycle
from dagbuilder.graph.errors import (
    CycleError,
    DuplicateEdgeError,
    EdgeNotFoundError,
    EmptyLabelError,
    InvalidPositionError,
    NodeNotFoundError,
    SelfLoopError,
    UnknownNodeError,
)
from dagbuilder.graph.graph_schema import Edge, GraphSnapshot, Node, Position
from dagbuilder.codec import snapshot_codec
from dagbuilder.utils.helpers import PositionSampler
from dagbuilder.utils.ids import new_node_id
from dagbuilder.utils.text import normalize_label

logger = logging.getLogger("dagbuilder.store")

PositionLike = Union[Position, Tuple[float, float]]


class GraphStore:
    """
    Authoritative in-memory DAG.

    Every mutation is validated before it touches the underlying graph,
    so a rejected operation leaves no trace. All public methods hold the
    store lock; readers see either the state before or after a mutation.
    """

    def __init__(self, config: Optional[StoreConfig] = None) -> None:
        self.config = config or StoreConfig()
        self._graph = nx.DiGraph()
        self._edge_seq = itertools.count()
        self._lock = threading.RLock()
        self._sampler = PositionSampler(
            x_range=(self.config.position_min_x, self.config.position_max_x),
            y_range=(self.config.position_min_y, self.config.position_max_y),
            seed=self.config.position_seed,
        )

    # -------------------- Nodes --------------------

    def add_node(self, label: str, position: Optional[PositionLike] = None) -> str:
        text = normalize_label(label)
        if not text:
            logger.warning("rejected add_node: empty label")
            raise EmptyLabelError("Node label cannot be empty")

        with self._lock:
            if position is None:
                pos = Position.create(*self._sampler.sample())
            else:
                pos = _as_position(position)
            node_id = new_node_id(self.config.id_prefix, taken=self._graph)
            self._graph.add_node(node_id, data=Node(id=node_id, label=text, position=pos))

        logger.info("added node %s label=%r", node_id, text)
        return node_id

    def delete_node(self, node_id: str) -> None:
        with self._lock:
            if node_id not in self._graph:
                logger.warning("rejected delete_node: %s not found", node_id)
                raise NodeNotFoundError(node_id)
            degree = self._graph.degree(node_id)
            # networkx drops incident edges together with the node
            self._graph.remove_node(node_id)

        logger.info("deleted node %s and %d incident edges", node_id, degree)

    def reposition_node(self, node_id: str, position: PositionLike) -> Node:
        with self._lock:
            if node_id not in self._graph:
                logger.warning("rejected reposition_node: %s not found", node_id)
                raise NodeNotFoundError(node_id)
            try:
                pos = _as_position(position)
            except InvalidPositionError:
                logger.warning(
                    "rejected reposition_node: invalid position %r for %s",
                    position,
                    node_id,
                )
                raise
            moved = self._graph.nodes[node_id]["data"].moved_to(pos)
            self._graph.nodes[node_id]["data"] = moved

        logger.info("moved node %s to (%g, %g)", node_id, pos.x, pos.y)
        return moved

    def get_node(self, node_id: str) -> Node:
        with self._lock:
            if node_id not in self._graph:
                raise NodeNotFoundError(node_id)
            return self._graph.nodes[node_id]["data"]

    def get_nodes(self) -> List[Node]:
        with self._lock:
            return [data["data"] for _, data in self._graph.nodes(data=True)]

    def has_node(self, node_id: str) -> bool:
        with self._lock:
            return node_id in self._graph

    # -------------------- Edges --------------------

    def add_edge(self, source: str, target: str) -> Edge:
        with self._lock:
            for endpoint in (source, target):
                if endpoint not in self._graph:
                    logger.warning("rejected add_edge: unknown node %s", endpoint)
                    raise UnknownNodeError(endpoint)

            if source == target:
                logger.warning("rejected add_edge: self-loop on %s", source)
                raise SelfLoopError(source)

            if self._graph.has_edge(source, target):
                logger.warning("rejected add_edge: duplicate %s -> %s", source, target)
                raise DuplicateEdgeError(source, target)

            candidate = Edge(source=source, target=target)
            if introduces_cycle(self._ordered_edges(), candidate):
                logger.warning("rejected add_edge: %s -> %s closes a cycle", source, target)
                raise CycleError(source, target)

            self._graph.add_edge(source, target, seq=next(self._edge_seq))

        logger.info("added edge %s -> %s", source, target)
        return candidate

    def delete_edge(self, source: str, target: str) -> None:
        with self._lock:
            if not self._graph.has_edge(source, target):
                logger.warning("rejected delete_edge: %s -> %s not found", source, target)
                raise EdgeNotFoundError(source, target)
            self._graph.remove_edge(source, target)

        logger.info("deleted edge %s -> %s", source, target)

    def has_edge(self, source: str, target: str) -> bool:
        with self._lock:
            return self._graph.has_edge(source, target)

    def get_edges(self) -> List[Edge]:
        with self._lock:
            return self._ordered_edges()

    def _ordered_edges(self) -> List[Edge]:
        ordered = sorted(self._graph.edges(data="seq"), key=lambda e: e[2])
        return [Edge(source=u, target=v) for u, v, _ in ordered]

    # -------------------- Whole graph --------------------

    def clear(self) -> None:
        with self._lock:
            self._graph = nx.DiGraph()
            self._edge_seq = itertools.count()
        logger.info("cleared graph")

    def snapshot(self) -> GraphSnapshot:
        with self._lock:
            return GraphSnapshot(
                nodes=tuple(self.get_nodes()),
                edges=tuple(self._ordered_edges()),
            )

    def replace(self, snapshot: GraphSnapshot) -> None:
        """
        Adopt ``snapshot`` as the whole graph.

        The snapshot is checked in full before anything changes; on
        failure MalformedSnapshotError propagates and the store keeps
        its previous state.
        """
        snapshot_codec.check_invariants(snapshot)

        graph = nx.DiGraph()
        seq = itertools.count()
        for node in snapshot.nodes:
            adopted = Node(
                id=node.id,
                label=normalize_label(node.label),
                position=Position.create(node.position.x, node.position.y),
            )
            graph.add_node(node.id, data=adopted)
        for edge in snapshot.edges:
            graph.add_edge(edge.source, edge.target, seq=next(seq))

        with self._lock:
            self._graph = graph
            self._edge_seq = seq

        logger.info(
            "replaced graph: nodes=%d edges=%d",
            len(snapshot.nodes),
            len(snapshot.edges),
        )

    def import_snapshot(self, document: Union[str, bytes]) -> GraphSnapshot:
        snapshot = snapshot_codec.decode(document)
        self.replace(snapshot)
        return snapshot

    def export_snapshot(self, indent: Optional[int] = 2) -> str:
        return snapshot_codec.encode(self.snapshot(), indent=indent)

    # -------------------- Analytics --------------------

    def node_count(self) -> int:
        with self._lock:
            return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        with self._lock:
            return self._graph.number_of_edges()


def _as_position(position: PositionLike) -> Position:
    if isinstance(position, Position):
        return Position.create(position.x, position.y)
    try:
        x, y = position
    except (TypeError, ValueError) as exc:
        raise InvalidPositionError(
            f"Position must be an (x, y) pair, got {position!r}"
        ) from exc
    return Position.create(x, y)
