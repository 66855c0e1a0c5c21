from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

from dagbuilder.graph.errors import InvalidPositionError


@dataclass(frozen=True)
class Position:
    """
    Canvas coordinate of a node. Opaque to the graph engine.
    """

    x: float
    y: float

    @staticmethod
    def create(x: float, y: float) -> "Position":
        try:
            fx, fy = float(x), float(y)
        except (TypeError, ValueError) as exc:
            raise InvalidPositionError(
                f"Position coordinates must be numbers, got ({x!r}, {y!r})"
            ) from exc

        if not (math.isfinite(fx) and math.isfinite(fy)):
            raise InvalidPositionError(
                f"Position coordinates must be finite, got ({x!r}, {y!r})"
            )
        return Position(x=fx, y=fy)


@dataclass(frozen=True)
class Node:
    """
    Labeled vertex of the DAG.
    """

    id: str
    label: str
    position: Position

    def moved_to(self, position: Position) -> "Node":
        return replace(self, position=position)


@dataclass(frozen=True)
class Edge:
    """
    Directed connection between two existing nodes.
    """

    source: str
    target: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Complete, immutable copy of graph state.

    Node and edge order is the insertion order of the store that
    produced it and is preserved through export and import.
    """

    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def node_ids(self) -> Tuple[str, ...]:
        return tuple(n.id for n in self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes
