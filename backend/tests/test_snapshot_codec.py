import json

import pytest

from dagbuilder.codec.snapshot_codec import check_invariants, decode, encode
from dagbuilder.graph.errors import CycleError, MalformedSnapshotError
from dagbuilder.graph.graph_schema import Edge, GraphSnapshot, Node, Position
from dagbuilder.graph.graph_store import GraphStore


def _doc(nodes, edges):
    return json.dumps({"nodes": nodes, "edges": edges})


def _node(node_id, label="n", x=1.0, y=2.0):
    return {"id": node_id, "label": label, "position": {"x": x, "y": y}}


def test_round_trip_preserves_nodes_and_edge_order(chain):
    store, a, b, c = chain
    store.add_edge(a, c)
    original = store.snapshot()

    restored = decode(encode(original))

    assert restored == original
    assert [n.label for n in restored.nodes] == ["A", "B", "C"]
    assert restored.edges == (Edge(a, b), Edge(b, c), Edge(a, c))


def test_encode_layout(chain):
    store, a, b, _ = chain
    store.reposition_node(a, (10, 20))

    document = json.loads(encode(store.snapshot()))

    assert set(document) == {"nodes", "edges"}
    assert document["nodes"][0] == {
        "id": a,
        "label": "A",
        "position": {"x": 10.0, "y": 20.0},
    }
    assert document["edges"][0] == {"from": a, "to": b}


def test_encode_is_deterministic(chain):
    store, *_ = chain
    assert encode(store.snapshot()) == encode(store.snapshot())


def test_decode_accepts_bytes():
    snap = decode(_doc([_node("a")], []).encode("utf-8"))
    assert snap.nodes == (Node("a", "n", Position(1.0, 2.0)),)


def test_decode_accepts_flat_coordinates():
    text = _doc([{"id": "a", "label": "A", "x": 3, "y": 4}], [])
    assert decode(text).nodes[0].position == Position(3.0, 4.0)


@pytest.mark.parametrize(
    "document",
    [
        "not json",
        b"\xff\xfe",
        "[]",
        "{}",
        _doc([_node("a")], None),
        json.dumps({"nodes": [_node("a")]}),
        _doc([{"id": "a", "label": "A"}], []),
        _doc([{"id": "a", "position": {"x": 1, "y": 1}}], []),
        _doc([{"id": 1, "label": "A", "position": {"x": 1, "y": 1}}], []),
        _doc([_node("a", x="left")], []),
        _doc([_node("a")], [{"from": "a"}]),
        _doc([_node("a")], ["a->b"]),
        '{"nodes": [{"id": "a", "label": "A", "position": {"x": NaN, "y": 0}}], "edges": []}',
        "[" * 100_000 + "]" * 100_000,
        _doc([_node("a", x=True)], []),
        _doc([{"id": "a", "label": "A", "x": 1, "y": False}], []),
    ],
)
def test_decode_rejects_malformed_documents(document):
    with pytest.raises(MalformedSnapshotError):
        decode(document)


@pytest.mark.parametrize(
    "nodes, edges, reason",
    [
        ([_node("a"), _node("a")], [], "Duplicate node id"),
        ([_node("a", label="   ")], [], "empty label"),
        ([_node("a")], [{"from": "a", "to": "ghost"}], "unknown node"),
        ([_node("a")], [{"from": "a", "to": "a"}], "Self-loop"),
        (
            [_node("a"), _node("b")],
            [{"from": "a", "to": "b"}, {"from": "a", "to": "b"}],
            "Duplicate edge",
        ),
        (
            [_node("a"), _node("b"), _node("c")],
            [
                {"from": "a", "to": "b"},
                {"from": "b", "to": "c"},
                {"from": "c", "to": "a"},
            ],
            "cycle",
        ),
    ],
)
def test_check_invariants_rejects_invalid_graphs(nodes, edges, reason):
    snapshot = decode(_doc(nodes, edges))

    with pytest.raises(MalformedSnapshotError, match=reason):
        check_invariants(snapshot)


def test_check_invariants_rejects_non_finite_positions():
    snapshot = GraphSnapshot(nodes=(Node("a", "A", Position(float("inf"), 0.0)),))
    with pytest.raises(MalformedSnapshotError):
        check_invariants(snapshot)


def test_import_replaces_graph(store):
    store.add_node("old")
    text = _doc(
        [_node("a", "A"), _node("b", "B")],
        [{"from": "a", "to": "b"}],
    )

    store.import_snapshot(text)

    assert [n.id for n in store.get_nodes()] == ["a", "b"]
    assert store.get_edges() == [Edge("a", "b")]


def test_imported_graph_keeps_enforcing_invariants(store):
    store.import_snapshot(
        _doc([_node("a"), _node("b")], [{"from": "a", "to": "b"}])
    )

    new_id = store.add_node("C")
    assert new_id not in {"a", "b"}
    store.add_edge("b", new_id)

    with pytest.raises(CycleError):
        store.add_edge(new_id, "a")


def test_import_with_dangling_edge_leaves_store_unchanged(chain):
    store, *_ = chain
    before = store.snapshot()

    with pytest.raises(MalformedSnapshotError):
        store.import_snapshot(
            _doc([_node("a")], [{"from": "a", "to": "missing"}])
        )

    assert store.snapshot() == before


def test_import_with_cycle_leaves_store_unchanged(chain):
    store, *_ = chain
    before = store.export_snapshot()

    with pytest.raises(MalformedSnapshotError):
        store.import_snapshot(
            _doc(
                [_node("a"), _node("b")],
                [{"from": "a", "to": "b"}, {"from": "b", "to": "a"}],
            )
        )

    assert store.export_snapshot() == before


def test_export_then_import_into_fresh_store(chain):
    source, *_ = chain

    target = GraphStore()
    target.import_snapshot(source.export_snapshot())

    assert target.snapshot() == source.snapshot()


def test_replace_trims_labels_of_caller_built_snapshots(store):
    store.replace(GraphSnapshot(nodes=(Node("a", "  A  ", Position(0.0, 0.0)),)))

    assert store.get_node("a").label == "A"


@pytest.mark.parametrize(
    "node",
    [
        Node("a", "A", (0.0, 0.0)),
        Node("a", "A", None),
        Node("a", None, Position(0.0, 0.0)),
        Node(7, "A", Position(0.0, 0.0)),
    ],
)
def test_replace_rejects_ill_typed_nodes(chain, node):
    store, *_ = chain
    before = store.snapshot()

    with pytest.raises(MalformedSnapshotError):
        store.replace(GraphSnapshot(nodes=(node,)))

    assert store.snapshot() == before


def test_replace_rejects_ill_typed_edge_endpoints(store):
    snapshot = GraphSnapshot(
        nodes=(Node("a", "A", Position(0.0, 0.0)),),
        edges=(Edge("a", ["b"]),),
    )

    with pytest.raises(MalformedSnapshotError):
        store.replace(snapshot)
    assert store.node_count() == 0
