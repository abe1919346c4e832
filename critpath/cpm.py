import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# latest times before the backward pass has run
INFINITY = math.inf


@dataclass
class VertexRecord:
    duration: int = 0
    es: int = 0
    ec: int = 0
    ls: float = INFINITY
    lc: float = INFINITY

    def reset(self):
        """clear computed times, keep the duration"""
        self.es = 0
        self.ec = 0
        self.ls = INFINITY
        self.lc = INFINITY

    @property
    def slack(self):
        return self.ls - self.es


def make_records(size):
    return [VertexRecord() for _ in range(size)]


def forward_pass(graph, records, topo_sorted):
    """
    input: the task graph, per-vertex records (indexed by vertex index), the sorted vertices
    fills es and ec of every record
    output: the total duration to complete the project
    """
    total_dur = 0
    #every predecessor of v is finished before v is read, so es(v) is final when v comes up
    for u in topo_sorted:
        ru = records[graph.index(u)]
        ru.ec = ru.es + ru.duration
        total_dur = max(total_dur, ru.ec)
        for e in graph.incident(u):
            rv = records[graph.index(graph.other_end(e, u))]
            rv.es = max(rv.es, ru.ec) #push u's completion to its successors
    logger.debug("Forward pass over %d tasks, project length %d", len(topo_sorted), total_dur)
    return total_dur


def backward_pass(graph, records, topo_sorted, total_dur):
    """
    input: the task graph, per-vertex records, the sorted vertices, total duration to finish project
    fills ls and lc of every record
    """
    #every task may finish as late as the project itself
    for u in topo_sorted:
        ru = records[graph.index(u)]
        ru.lc = total_dur
        ru.ls = total_dur - ru.duration
    #tighten with each successor, successors first
    for u in reversed(topo_sorted):
        ru = records[graph.index(u)]
        for e in graph.incident(u):
            rv = records[graph.index(graph.other_end(e, u))]
            ru.lc = min(ru.lc, rv.ls)
            ru.ls = ru.lc - ru.duration
    logger.debug("Backward pass over %d tasks", len(topo_sorted))


def calculate_slack(graph, records, topo_sorted):
    """
    input:
        the task graph
        per-vertex records after both passes
        sorted vertices
    output:
        dict with slack per task
        list of critical tasks (zero slack), in topological order
    """
    slack_dict = {}
    cp = []
    for task in topo_sorted:
        slack = records[graph.index(task)].slack
        slack_dict[task] = slack
        if slack == 0:
            cp.append(task)
    return slack_dict, cp


def critical_chain(graph, records, topo_sorted):
    """
    input: the task graph, per-vertex records after both passes, sorted vertices
    output: one chain of zero-slack tasks, each starting when the previous one completes,
            from a task starting at 0 to a task completing at the project length
    """
    def rec(v):
        return records[graph.index(v)]

    start = next((v for v in topo_sorted if rec(v).slack == 0 and rec(v).es == 0), None)
    if start is None:
        return []
    chain = [start]
    while True:
        u = chain[-1]
        nxt = None
        for e in graph.incident(u):
            v = graph.other_end(e, u)
            if rec(v).slack == 0 and rec(v).es == rec(u).ec:
                nxt = v
                break
        if nxt is None:
            return chain
        chain.append(nxt)
