from __future__ import annotations

from typing import Container
from uuid import uuid4


def new_node_id(prefix: str = "node", taken: Container[str] = ()) -> str:
    """
    Returns a fresh node identifier not present in ``taken``.
    """
    while True:
        candidate = f"{prefix}-{uuid4().hex}"
        if candidate not in taken:
            return candidate
