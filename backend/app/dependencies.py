from functools import lru_cache
import logging
from pathlib import Path
import time

from dagbuilder.graph.errors import MalformedSnapshotError
from dagbuilder.graph.graph_store import GraphStore

from backend.app.config import AppConfig


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()


@lru_cache
def get_graph_store() -> GraphStore:
    logger = logging.getLogger("dagbuilder.startup")
    t0 = time.perf_counter()
    config = get_config()
    store = GraphStore(config.dagbuilder.store)

    if config.snapshot_path:
        path = Path(config.snapshot_path)
        if path.exists():
            try:
                store.import_snapshot(path.read_bytes())
                logger.info(
                    "[startup] loaded snapshot %s: nodes=%d edges=%d",
                    path,
                    store.node_count(),
                    store.edge_count(),
                )
            except (OSError, MalformedSnapshotError) as exc:
                logger.warning(
                    "[startup] ignoring snapshot %s: %s; starting empty",
                    path,
                    exc,
                )
        else:
            logger.info("[startup] snapshot %s not found; starting empty", path)

    logger.info("[startup] get_graph_store total %.3fs", time.perf_counter() - t0)
    return store
