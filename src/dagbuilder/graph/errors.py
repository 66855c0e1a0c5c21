from __future__ import annotations


class DagError(Exception):
    """
    Base class for every rejected graph operation.

    A raised DagError always means the store was left unchanged.
    """

    code: str = "dag_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyLabelError(DagError, ValueError):
    code = "empty_label"


class InvalidPositionError(DagError, ValueError):
    code = "invalid_position"


class NodeNotFoundError(DagError, LookupError):
    code = "not_found"

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id!r}")
        self.node_id = node_id


class EdgeNotFoundError(DagError, LookupError):
    code = "not_found"

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"Edge not found: {source!r} -> {target!r}")
        self.source = source
        self.target = target


class UnknownNodeError(DagError, LookupError):
    """
    An edge endpoint does not name an existing node.
    """

    code = "unknown_node"

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Edge endpoint is not a known node: {node_id!r}")
        self.node_id = node_id


class SelfLoopError(DagError):
    code = "self_loop"

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Cannot connect node {node_id!r} to itself")
        self.node_id = node_id


class DuplicateEdgeError(DagError):
    code = "duplicate_edge"

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"Edge already exists: {source!r} -> {target!r}")
        self.source = source
        self.target = target


class CycleError(DagError):
    code = "would_create_cycle"

    def __init__(self, source: str, target: str) -> None:
        super().__init__(
            f"Cannot add edge {source!r} -> {target!r}: would create a cycle"
        )
        self.source = source
        self.target = target


class MalformedSnapshotError(DagError, ValueError):
    """
    A snapshot document could not be decoded or violates graph invariants.
    """

    code = "malformed"
