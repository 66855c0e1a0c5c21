import json
from dataclasses import asdict
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.app.config import AppConfig  # noqa: E402
from dagbuilder.graph.errors import DagError  # noqa: E402
from dagbuilder.graph.graph_query import GraphQueryEngine  # noqa: E402
from dagbuilder.graph.graph_store import GraphStore  # noqa: E402


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logger = logging.getLogger("dagbuilder.run")
    config = AppConfig()
    store = GraphStore(config.dagbuilder.store)

    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
        try:
            store.import_snapshot(path.read_bytes())
        except (OSError, DagError) as exc:
            logger.error("cannot import %s: %s", path, exc)
            raise SystemExit(1)
    else:
        fetch = store.add_node("fetch")
        parse = store.add_node("parse")
        index = store.add_node("index")
        store.add_edge(fetch, parse)
        store.add_edge(parse, index)

        # Closing the chain must be refused.
        try:
            store.add_edge(index, fetch)
        except DagError as exc:
            logger.info("rejected as expected: [%s] %s", exc.code, exc)

    engine = GraphQueryEngine(store.snapshot())
    labels = {n.id: n.label for n in store.get_nodes()}
    logger.info(
        "topological order: %s",
        " -> ".join(labels[n] for n in engine.topological_order()),
    )
    logger.info("stats: %s", json.dumps(asdict(engine.stats())))
    print(store.export_snapshot(indent=config.dagbuilder.codec.indent))


if __name__ == "__main__":
    main()
