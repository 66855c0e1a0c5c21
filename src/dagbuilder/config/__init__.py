"""
Configuration layer for dagbuilder.

Configuration in dagbuilder is:
- Explicit (passed, not global)
- Typed (frozen dataclasses)
- Optional (every field has a working default)
"""

from dagbuilder.config.settings import (
    StoreConfig,
    CodecConfig,
    DagBuilderConfig,
)

__all__ = [
    "StoreConfig",
    "CodecConfig",
    "DagBuilderConfig",
]
