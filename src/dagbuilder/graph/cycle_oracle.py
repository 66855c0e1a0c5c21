"""
Cycle detection for proposed edge insertions.

The oracle answers one question for the store: would the current edge set,
extended by a single candidate edge, still be acyclic?
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set

from dagbuilder.graph.graph_schema import Edge


def _adjacency(edges: Iterable[Edge]) -> Dict[str, List[str]]:
    adjacency: Dict[str, List[str]] = {}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
    return adjacency


def _reaches_back_edge(
    start: str,
    adjacency: Dict[str, List[str]],
    visited: Set[str],
) -> bool:
    """
    Depth-first search from ``start`` looking for a back-edge.

    Uses an explicit stack of (node, successor iterator) frames so deep
    graphs never hit the interpreter recursion limit. ``visited`` is shared
    across calls; ``on_stack`` holds only the current path.
    """
    on_stack: Set[str] = {start}
    visited.add(start)
    stack = [(start, iter(adjacency.get(start, ())))]

    while stack:
        node, successors = stack[-1]
        advanced = False

        for nxt in successors:
            if nxt in on_stack:
                return True
            if nxt not in visited:
                visited.add(nxt)
                on_stack.add(nxt)
                stack.append((nxt, iter(adjacency.get(nxt, ()))))
                advanced = True
                break

        if not advanced:
            stack.pop()
            on_stack.discard(node)

    return False


def introduces_cycle(edges: Iterable[Edge], candidate: Edge) -> bool:
    """
    Return True if adding ``candidate`` to ``edges`` creates a directed cycle.

    A node reached a second time through a different path is ordinary DAG
    structure; only a node still on the active path counts.
    """
    if candidate.source == candidate.target:
        return True

    adjacency = _adjacency(list(edges) + [candidate])
    return _reaches_back_edge(candidate.source, adjacency, set())


def has_cycle(edges: Iterable[Edge]) -> bool:
    """
    Return True if the edge set contains any directed cycle.
    """
    adjacency = _adjacency(edges)
    visited: Set[str] = set()

    for node in adjacency:
        if node in visited:
            continue
        if _reaches_back_edge(node, adjacency, visited):
            return True

    return False
