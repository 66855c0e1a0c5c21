"""
JSON exchange format for whole-graph snapshots.

Document layout::

    {
      "nodes": [{"id": "...", "label": "...", "position": {"x": 0.0, "y": 0.0}}],
      "edges": [{"from": "...", "to": "..."}]
    }

Node and edge order is significant and preserved in both directions.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Set, Tuple, Union

import networkx as nx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictStr,
    ValidationError,
    model_validator,
)

from dagbuilder.graph.errors import InvalidPositionError, MalformedSnapshotError
from dagbuilder.graph.graph_schema import Edge, GraphSnapshot, Node, Position
from dagbuilder.utils.text import normalize_label

logger = logging.getLogger("dagbuilder.codec")


# ---------------------------------------------------------------------
# Wire records
# ---------------------------------------------------------------------


class PositionRecord(BaseModel):
    x: StrictFloat = Field(allow_inf_nan=False)
    y: StrictFloat = Field(allow_inf_nan=False)


class NodeRecord(BaseModel):
    id: StrictStr
    label: StrictStr
    position: Optional[PositionRecord] = None

    # Flat coordinates written by earlier exports of the builder
    x: Optional[StrictFloat] = Field(default=None, allow_inf_nan=False)
    y: Optional[StrictFloat] = Field(default=None, allow_inf_nan=False)

    @model_validator(mode="after")
    def resolve_position(self) -> "NodeRecord":
        if self.position is None:
            if self.x is None or self.y is None:
                raise ValueError("node record requires 'position' or 'x'/'y'")
            self.position = PositionRecord(x=self.x, y=self.y)
        return self


class EdgeRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: StrictStr = Field(alias="from")
    target: StrictStr = Field(alias="to")


class SnapshotDocument(BaseModel):
    nodes: List[NodeRecord]
    edges: List[EdgeRecord]


# ---------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------


def to_document(snapshot: GraphSnapshot) -> Dict[str, Any]:
    return {
        "nodes": [
            {
                "id": node.id,
                "label": node.label,
                "position": {"x": node.position.x, "y": node.position.y},
            }
            for node in snapshot.nodes
        ],
        "edges": [
            {"from": edge.source, "to": edge.target}
            for edge in snapshot.edges
        ],
    }


def encode(snapshot: GraphSnapshot, indent: Optional[int] = 2) -> str:
    text = json.dumps(to_document(snapshot), indent=indent, ensure_ascii=False)
    logger.info(
        "encoded snapshot nodes=%d edges=%d bytes=%d",
        len(snapshot.nodes),
        len(snapshot.edges),
        len(text),
    )
    return text


def decode(document: Union[str, bytes]) -> GraphSnapshot:
    """
    Parse a snapshot document.

    Only the document's shape is checked here; graph invariants are
    checked by :func:`check_invariants` before a store adopts it.

    Raises:
        MalformedSnapshotError: on any parse or shape error
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("snapshot is not valid UTF-8: %s", exc)
            raise MalformedSnapshotError("Snapshot is not valid UTF-8") from exc

    try:
        payload = json.loads(document)
    except RecursionError as exc:
        logger.warning("snapshot exceeds the nesting limit")
        raise MalformedSnapshotError("Snapshot is nested too deeply") from exc
    except (TypeError, ValueError) as exc:
        logger.warning("snapshot is not valid JSON: %s", exc)
        raise MalformedSnapshotError(f"Snapshot is not valid JSON: {exc}") from exc

    return from_document(payload)


def from_document(payload: Any) -> GraphSnapshot:
    try:
        parsed = SnapshotDocument.model_validate(payload)
    except ValidationError as exc:
        logger.warning("snapshot has invalid shape: %d errors", exc.error_count())
        raise MalformedSnapshotError(_summarize(exc)) from exc

    nodes = tuple(
        Node(
            id=record.id,
            label=normalize_label(record.label),
            position=Position(x=record.position.x, y=record.position.y),
        )
        for record in parsed.nodes
    )
    edges = tuple(Edge(source=r.source, target=r.target) for r in parsed.edges)

    logger.info("decoded snapshot nodes=%d edges=%d", len(nodes), len(edges))
    return GraphSnapshot(nodes=nodes, edges=edges)


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0]
    where = ".".join(str(part) for part in first["loc"]) or "<document>"
    return f"Malformed snapshot at {where}: {first['msg']}"


# ---------------------------------------------------------------------
# Import contract
# ---------------------------------------------------------------------


def check_invariants(snapshot: GraphSnapshot) -> None:
    """
    Verify a snapshot satisfies every invariant a live store guarantees.

    Raises:
        MalformedSnapshotError: naming the first violation found
    """
    node_ids: Set[str] = set()
    for node in snapshot.nodes:
        if not isinstance(node.id, str):
            raise MalformedSnapshotError(f"Node id must be a string: {node.id!r}")
        if node.id in node_ids:
            raise MalformedSnapshotError(f"Duplicate node id: {node.id!r}")
        if not normalize_label(node.label):
            raise MalformedSnapshotError(f"Node {node.id!r} has an empty label")
        if not isinstance(node.position, Position):
            raise MalformedSnapshotError(
                f"Node {node.id!r} has an invalid position: {node.position!r}"
            )
        try:
            Position.create(node.position.x, node.position.y)
        except InvalidPositionError as exc:
            raise MalformedSnapshotError(f"Node {node.id!r}: {exc.message}") from exc
        node_ids.add(node.id)

    seen: Set[Tuple[str, str]] = set()
    graph = nx.DiGraph()
    graph.add_nodes_from(node_ids)

    for edge in snapshot.edges:
        for endpoint in (edge.source, edge.target):
            if not isinstance(endpoint, str) or endpoint not in node_ids:
                raise MalformedSnapshotError(
                    f"Edge {edge.source!r} -> {edge.target!r} references "
                    f"unknown node {endpoint!r}"
                )
        if edge.source == edge.target:
            raise MalformedSnapshotError(f"Self-loop on node {edge.source!r}")
        if edge.key in seen:
            raise MalformedSnapshotError(
                f"Duplicate edge: {edge.source!r} -> {edge.target!r}"
            )
        seen.add(edge.key)
        graph.add_edge(edge.source, edge.target)

    try:
        cycle = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        return

    path = " -> ".join(u for u, _ in cycle) + f" -> {cycle[0][0]}"
    raise MalformedSnapshotError(f"Snapshot contains a cycle: {path}")
