from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# ---------------------------------------------------------------------
# Graph store policy
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class StoreConfig:
    """
    Controls how the store allocates identifiers and initial positions
    for new nodes.

    Positions are drawn uniformly from the allocation box when the
    caller does not supply one.
    """

    id_prefix: str = "node"
    position_min_x: float = 100.0
    position_max_x: float = 500.0
    position_min_y: float = 100.0
    position_max_y: float = 400.0
    position_seed: Optional[int] = None


# ---------------------------------------------------------------------
# Snapshot exchange format
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class CodecConfig:
    """
    Controls the textual layout of exported snapshots.
    """

    indent: Optional[int] = 2
    export_filename: str = "dag-graph.json"


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class DagBuilderConfig:
    """
    Root configuration object for dagbuilder.

    Constructed explicitly and passed to the store and codec; never global.
    """

    store: StoreConfig = field(default_factory=StoreConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
