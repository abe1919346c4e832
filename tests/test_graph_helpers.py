import networkx as nx
import pytest

from critpath.exceptions import UnknownVertexError
from critpath.graph_helpers import TaskGraph, build_graph


def test_build_graph_assigns_dense_indices():
    G = build_graph({"A": 2, "B": 3, "C": 1}, [("A", "B"), ("B", "C")])
    assert [G.nodes[n]["index"] for n in ["A", "B", "C"]] == [0, 1, 2]
    assert G.nodes["B"]["duration"] == 3
    assert list(G.edges()) == [("A", "B"), ("B", "C")]


def test_build_graph_keeps_cycles():
    G = build_graph({"A": 1, "B": 1}, [("A", "B"), ("B", "A")])
    assert not nx.is_directed_acyclic_graph(G)


def test_build_graph_rejects_unknown_endpoint():
    with pytest.raises(UnknownVertexError, match="Z"):
        build_graph({"A": 1}, [("A", "Z")])


def test_task_graph_interface(diamond):
    assert len(diamond) == diamond.size() == 4
    assert list(diamond) == [1, 2, 3, 4]
    assert diamond.index(3) == 2
    assert diamond.vertex(2) == 3
    assert diamond.incident(1) == [(1, 2), (1, 3)]
    assert diamond.incident(4) == []
    edge = diamond.incident(1)[0]
    assert diamond.other_end(edge, 1) == 2
    assert diamond.other_end(edge, 2) == 1
    assert diamond.duration(2) == 3


def test_task_graph_bounds_checked(diamond):
    with pytest.raises(UnknownVertexError):
        diamond.index(99)
    with pytest.raises(UnknownVertexError):
        diamond.vertex(4)
    with pytest.raises(UnknownVertexError):
        diamond.incident(99)
    with pytest.raises(ValueError):
        diamond.other_end((1, 2), 3)


def test_task_graph_wraps_plain_digraph():
    G = nx.DiGraph()
    G.add_edges_from([("x", "y"), ("w", "x")])
    g = TaskGraph(G)
    assert list(g) == ["x", "y", "w"]
    assert g.index("w") == 2
    assert g.duration("x") == 0


def test_task_graph_rejects_sparse_indices():
    G = nx.DiGraph()
    G.add_node("a", index=0)
    G.add_node("b", index=2)
    with pytest.raises(ValueError):
        TaskGraph(G)
