from dagbuilder.graph.cycle_oracle import has_cycle, introduces_cycle
from dagbuilder.graph.graph_schema import Edge


def _edges(*pairs):
    return [Edge(source=s, target=t) for s, t in pairs]


def test_edge_into_empty_graph_is_safe():
    assert not introduces_cycle([], Edge("a", "b"))


def test_self_loop_is_a_cycle():
    assert introduces_cycle([], Edge("a", "a"))


def test_back_edge_closes_cycle():
    edges = _edges(("a", "b"), ("b", "c"))
    assert introduces_cycle(edges, Edge("c", "a"))
    assert introduces_cycle(edges, Edge("b", "a"))


def test_revisiting_through_second_path_is_not_a_cycle():
    # a -> b -> d and a -> c -> d; d is reached twice.
    edges = _edges(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"))
    assert not introduces_cycle(edges, Edge("a", "d"))
    assert not introduces_cycle(edges, Edge("b", "c"))
    assert introduces_cycle(edges, Edge("d", "a"))


def test_unrelated_components_do_not_interfere():
    edges = _edges(("x", "y"), ("y", "z"))
    assert not introduces_cycle(edges, Edge("a", "x"))
    assert not introduces_cycle(edges, Edge("z", "a"))


def test_long_chain_does_not_hit_recursion_limit():
    n = 20_000
    edges = _edges(*((f"n{i}", f"n{i + 1}") for i in range(n)))

    assert introduces_cycle(edges, Edge(f"n{n}", "n0"))
    assert not introduces_cycle(edges, Edge("n0", f"n{n}"))
    assert not has_cycle(edges)


def test_oracle_does_not_mutate_input():
    edges = _edges(("a", "b"))
    introduces_cycle(edges, Edge("b", "c"))
    assert edges == _edges(("a", "b"))


def test_has_cycle():
    assert not has_cycle([])
    assert not has_cycle(_edges(("a", "b"), ("a", "c"), ("b", "c")))
    assert has_cycle(_edges(("a", "b"), ("b", "c"), ("c", "a")))
    assert has_cycle(_edges(("x", "y"), ("a", "a")))
