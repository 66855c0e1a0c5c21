from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Set

import networkx as nx

from dagbuilder.graph.errors import NodeNotFoundError
from dagbuilder.graph.graph_schema import GraphSnapshot


@dataclass(frozen=True)
class GraphStats:
    """
    Structural summary of a DAG.
    """

    nodes: int
    edges: int
    roots: int
    leaves: int
    longest_path: int


class GraphQueryEngine:
    """
    Read-only structural queries over a snapshot.

    Queries never touch a live store; take a fresh snapshot to observe
    later mutations.
    """

    def __init__(self, snapshot: GraphSnapshot) -> None:
        self.snapshot = snapshot
        self._order: Dict[str, int] = {
            node_id: i for i, node_id in enumerate(snapshot.node_ids())
        }
        self._graph = nx.DiGraph()
        self._graph.add_nodes_from(self._order)
        self._graph.add_edges_from(e.key for e in snapshot.edges)

    def topological_order(self) -> List[str]:
        """
        Dependencies first; ties resolved by node insertion order.
        """
        return list(
            nx.lexicographical_topological_sort(
                self._graph, key=self._order.__getitem__
            )
        )

    def roots(self) -> List[str]:
        return [n for n in self._order if self._graph.in_degree(n) == 0]

    def leaves(self) -> List[str]:
        return [n for n in self._order if self._graph.out_degree(n) == 0]

    def ancestors(self, node_id: str) -> Set[str]:
        self._require(node_id)
        return set(nx.ancestors(self._graph, node_id))

    def descendants(self, node_id: str) -> Set[str]:
        self._require(node_id)
        return set(nx.descendants(self._graph, node_id))

    def stats(self) -> GraphStats:
        longest = nx.dag_longest_path_length(self._graph) if self._order else 0
        return GraphStats(
            nodes=self._graph.number_of_nodes(),
            edges=self._graph.number_of_edges(),
            roots=len(self.roots()),
            leaves=len(self.leaves()),
            longest_path=int(longest),
        )

    def _require(self, node_id: str) -> None:
        if node_id not in self._order:
            raise NodeNotFoundError(node_id)
