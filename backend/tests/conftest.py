from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from contextlib import asynccontextmanager

from backend.app.main import create_app
from backend.app.config import AppConfig
from backend.app.dependencies import get_graph_store

from dagbuilder.config.settings import StoreConfig
from dagbuilder.graph.graph_store import GraphStore


@pytest.fixture()
def store() -> GraphStore:
    return GraphStore(StoreConfig(position_seed=7))


@pytest.fixture()
def chain(store: GraphStore):
    """
    A -> B -> C
    """
    a = store.add_node("A")
    b = store.add_node("B")
    c = store.add_node("C")
    store.add_edge(a, b)
    store.add_edge(b, c)
    return store, a, b, c


@pytest.fixture()
def client(store: GraphStore):
    @asynccontextmanager
    async def _no_lifespan(_: FastAPI):
        yield

    app = create_app(AppConfig())
    app.router.lifespan_context = _no_lifespan

    app.dependency_overrides[get_graph_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
