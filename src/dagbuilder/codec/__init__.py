"""
Snapshot codec for dagbuilder.

Turns a GraphSnapshot into a JSON document and back, and checks that a
decoded document is a valid DAG before any store adopts it.
"""

from dagbuilder.codec.snapshot_codec import (
    encode,
    decode,
    check_invariants,
)

__all__ = [
    "encode",
    "decode",
    "check_invariants",
]
