import pytest

from critpath.graph_helpers import TaskGraph, build_graph


def make_graph(durations, edges):
    """durations: {vertex: duration}; edges: [(u, v), ...]"""
    return TaskGraph(build_graph(durations, edges))


@pytest.fixture
def diamond():
    # vertex 4 is a zero-duration sink
    return make_graph({1: 0, 2: 3, 3: 2, 4: 0}, [(1, 2), (1, 3), (2, 4), (3, 4)])


@pytest.fixture
def two_cycle():
    return make_graph({1: 1, 2: 1}, [(1, 2), (2, 1)])


@pytest.fixture
def two_chains():
    # a1 -> a2 -> a3 (total 6) and b1 -> b2 (total 9), no edges between them
    return make_graph(
        {"a1": 1, "a2": 2, "a3": 3, "b1": 4, "b2": 5},
        [("a1", "a2"), ("a2", "a3"), ("b1", "b2")],
    )


@pytest.fixture
def sample():
    # same graph as config.SAMPLE_GRAPH
    edges = [(1, 2), (2, 4), (2, 5), (3, 5), (3, 6), (4, 7), (5, 7), (5, 8),
             (6, 8), (6, 9), (7, 10), (8, 10), (9, 10)]
    durations = [0, 3, 2, 3, 2, 1, 3, 2, 4, 1]
    return make_graph({i + 1: d for i, d in enumerate(durations)}, edges)


@pytest.fixture
def graph_factory():
    return make_graph
