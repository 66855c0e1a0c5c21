"""
dagbuilder
==========

An interactive directed-acyclic-graph builder engine.

Core idea:
- The store never exposes a graph with a cycle, whether edits arrive
  one edge at a time or as a whole imported snapshot.

Public API:
- GraphStore
- GraphSnapshot
- GraphQueryEngine
- introduces_cycle
"""

from dagbuilder.graph.graph_schema import GraphSnapshot
from dagbuilder.graph.graph_store import GraphStore
from dagbuilder.graph.graph_query import GraphQueryEngine
from dagbuilder.graph.cycle_oracle import introduces_cycle

__all__ = [
    "GraphStore",
    "GraphSnapshot",
    "GraphQueryEngine",
    "introduces_cycle",
]

__version__ = "0.1.0"
