import pytest

from critpath.traversal import DONE, UNVISITED, Coloring, find_cycle, is_dag, topological_order


def assert_topological(graph, order):
    assert sorted(order, key=graph.index) == list(graph)
    position = {v: i for i, v in enumerate(order)}
    for u, v in graph.edges():
        assert position[u] < position[v]


def test_diamond_is_dag(diamond):
    assert is_dag(diamond)
    assert find_cycle(diamond) is None


def test_two_cycle_detected(two_cycle):
    assert not is_dag(two_cycle)
    assert sorted(find_cycle(two_cycle)) == [1, 2]


def test_self_loop_is_cycle(graph_factory):
    g = graph_factory({"a": 1, "b": 1}, [("a", "b"), ("b", "b")])
    assert not is_dag(g)
    assert find_cycle(g) == ["b"]


def test_cycle_reachable_only_from_later_root(graph_factory):
    # vertex 0 is acyclic on its own, the cycle sits in another component
    g = graph_factory({0: 1, 1: 1, 2: 1, 3: 1}, [(0, 1), (2, 3), (3, 2)])
    assert not is_dag(g)


def test_find_cycle_returns_real_cycle(graph_factory):
    g = graph_factory({v: 1 for v in "abcde"}, [("a", "b"), ("b", "c"), ("c", "d"), ("d", "b"), ("d", "e")])
    cycle = find_cycle(g)
    assert sorted(cycle) == ["b", "c", "d"]
    edges = set(g.edges())
    for u, v in zip(cycle, cycle[1:] + cycle[:1]):
        assert (u, v) in edges


def test_cross_edge_is_not_a_cycle(graph_factory):
    # c is DONE when reached again from b
    g = graph_factory({v: 1 for v in "abc"}, [("a", "c"), ("b", "c")])
    assert is_dag(g)


def test_topological_order_diamond(diamond):
    order = topological_order(diamond)
    assert order[0] == 1 and order[-1] == 4
    assert_topological(diamond, order)


def test_topological_order_includes_isolated_vertices(graph_factory):
    g = graph_factory({"x": 1, "lonely": 2, "y": 1}, [("x", "y")])
    order = topological_order(g)
    assert len(order) == 3
    assert_topological(g, order)


def test_topological_order_sample(sample):
    assert_topological(sample, topological_order(sample))


def test_topological_order_terminates_on_cycle(two_cycle):
    assert sorted(topological_order(two_cycle)) == [1, 2]


def test_deep_chain_does_not_recurse(graph_factory):
    n = 5000
    g = graph_factory({i: 1 for i in range(n)}, [(i, i + 1) for i in range(n - 1)])
    assert is_dag(g)
    assert topological_order(g) == list(range(n))


def test_shared_coloring_is_reset_between_traversals(sample):
    coloring = Coloring(sample.size())
    assert is_dag(sample, coloring)
    assert all(coloring[i] == DONE for i in range(len(coloring)))
    order = topological_order(sample, coloring)
    assert len(order) == sample.size()
    assert_topological(sample, order)


def test_abandoned_cycle_check_does_not_leak_into_sort(two_cycle):
    coloring = Coloring(two_cycle.size())
    assert not is_dag(two_cycle, coloring)
    assert sorted(topological_order(two_cycle, coloring)) == [1, 2]


def test_coloring_reset():
    c = Coloring(3)
    c[1] = DONE
    c.reset()
    assert [c[i] for i in range(3)] == [UNVISITED] * 3


def test_coloring_size_must_match(diamond):
    with pytest.raises(ValueError):
        is_dag(diamond, Coloring(2))
