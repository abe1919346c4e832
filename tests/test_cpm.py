import math

from critpath.cpm import (
    INFINITY, VertexRecord, backward_pass, calculate_slack, critical_chain, forward_pass, make_records,
)
from critpath.traversal import topological_order


def analyse(graph):
    records = make_records(graph.size())
    for v in graph:
        records[graph.index(v)].duration = graph.duration(v)
    order = topological_order(graph)
    total = forward_pass(graph, records, order)
    backward_pass(graph, records, order, total)
    return records, order, total


def test_record_defaults_and_reset():
    r = VertexRecord(duration=4)
    assert (r.es, r.ec) == (0, 0)
    assert r.ls == INFINITY and r.lc == INFINITY and math.isinf(r.lc)
    r.es, r.ec, r.ls, r.lc = 1, 5, 2, 6
    r.reset()
    assert r.duration == 4
    assert (r.es, r.ec, r.ls, r.lc) == (0, 0, INFINITY, INFINITY)


def test_forward_pass_diamond(diamond):
    records = make_records(diamond.size())
    for v in diamond:
        records[diamond.index(v)].duration = diamond.duration(v)
    total = forward_pass(diamond, records, topological_order(diamond))
    assert total == 3
    assert [records[diamond.index(v)].ec for v in [1, 2, 3, 4]] == [0, 3, 2, 3]
    assert [records[diamond.index(v)].es for v in [1, 2, 3, 4]] == [0, 0, 0, 3]
    # latest times untouched until the backward pass
    assert all(r.lc == INFINITY for r in records)


def test_backward_pass_diamond(diamond):
    records, _, _ = analyse(diamond)
    assert [records[diamond.index(v)].lc for v in [1, 2, 3, 4]] == [0, 3, 3, 3]
    assert [records[diamond.index(v)].ls for v in [1, 2, 3, 4]] == [0, 0, 1, 3]


def test_forward_pass_empty_graph(graph_factory):
    g = graph_factory({}, [])
    assert forward_pass(g, [], []) == 0


def test_calculate_slack_sample(sample):
    records, order, total = analyse(sample)
    assert total == 10
    slack_dict, cp = calculate_slack(sample, records, order)
    assert slack_dict == {1: 0, 2: 0, 3: 2, 4: 0, 5: 1, 6: 2, 7: 0, 8: 2, 9: 2, 10: 0}
    assert sorted(cp) == [1, 2, 4, 7, 10]
    # cp keeps topological order
    assert cp == [v for v in order if v in {1, 2, 4, 7, 10}]


def test_sample_times(sample):
    records, _, _ = analyse(sample)
    ec = [records[sample.index(v)].ec for v in sample]
    lc = [records[sample.index(v)].lc for v in sample]
    assert ec == [0, 3, 2, 6, 5, 3, 9, 7, 7, 10]
    assert lc == [0, 3, 4, 6, 6, 5, 9, 9, 9, 10]


def test_critical_chain_sample(sample):
    records, order, total = analyse(sample)
    chain = critical_chain(sample, records, order)
    assert chain == [1, 2, 4, 7, 10]
    assert sum(sample.duration(v) for v in chain) == total


def test_critical_chain_ends_at_zero_duration_sink(diamond):
    records, order, _ = analyse(diamond)
    assert critical_chain(diamond, records, order) == [1, 2, 4]


def test_critical_chain_empty(graph_factory):
    g = graph_factory({}, [])
    assert critical_chain(g, [], []) == []
