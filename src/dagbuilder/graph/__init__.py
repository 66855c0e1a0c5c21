"""
Graph subsystem for dagbuilder.

Defines the DAG engine:
- node and edge model
- the authoritative store and its invariants
- cycle detection for proposed edges
- read-only structural queries
"""

from dagbuilder.graph.graph_schema import Node, Edge, Position, GraphSnapshot
from dagbuilder.graph.errors import (
    DagError,
    EmptyLabelError,
    InvalidPositionError,
    NodeNotFoundError,
    EdgeNotFoundError,
    UnknownNodeError,
    SelfLoopError,
    DuplicateEdgeError,
    CycleError,
    MalformedSnapshotError,
)
from dagbuilder.graph.cycle_oracle import introduces_cycle, has_cycle
from dagbuilder.graph.graph_store import GraphStore
from dagbuilder.graph.graph_query import GraphQueryEngine, GraphStats

__all__ = [
    "Node",
    "Edge",
    "Position",
    "GraphSnapshot",
    "DagError",
    "EmptyLabelError",
    "InvalidPositionError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "UnknownNodeError",
    "SelfLoopError",
    "DuplicateEdgeError",
    "CycleError",
    "MalformedSnapshotError",
    "introduces_cycle",
    "has_cycle",
    "GraphStore",
    "GraphQueryEngine",
    "GraphStats",
]
