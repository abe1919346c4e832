"""
Depth-first traversals over a TaskGraph: cycle detection and topological order.

Both traversals are driven over every vertex index, so disconnected graphs and
isolated vertices are covered. The DFS keeps an explicit stack of
(vertex, edge iterator) pairs instead of recursing; a long chain of tasks
would otherwise run into Python's recursion limit.
"""
import logging
from collections import deque

logger = logging.getLogger(__name__)

UNVISITED = 0
IN_PROGRESS = 1
DONE = 2


class Coloring:
    """
    Per-vertex traversal state, indexed by dense vertex index.
    Must be reset before every independent traversal.
    """

    def __init__(self, size):
        self.state = [UNVISITED] * size

    def reset(self):
        for i in range(len(self.state)):
            self.state[i] = UNVISITED

    def __getitem__(self, i):
        return self.state[i]

    def __setitem__(self, i, value):
        self.state[i] = value

    def __len__(self):
        return len(self.state)


def _session(graph, coloring):
    if coloring is None:
        return Coloring(graph.size())
    if len(coloring) != graph.size():
        raise ValueError(f"Coloring covers {len(coloring)} vertices, graph has {graph.size()}")
    coloring.reset()
    return coloring


def _dfs(graph, coloring, root, on_finish=None, stop_on_back_edge=False):
    """
    input: graph, coloring, the vertex to start from
    calls on_finish(v) in postorder; with stop_on_back_edge, returns the vertices
    of the first cycle found (in edge order) and abandons the traversal
    output: the cycle, or None
    """
    coloring[graph.index(root)] = IN_PROGRESS
    stack = [(root, iter(graph.incident(root)))]
    while stack:
        v, edges = stack[-1]
        for e in edges:
            u = graph.other_end(e, v)
            state = coloring[graph.index(u)]
            if state == IN_PROGRESS and stop_on_back_edge:
                # vertices IN_PROGRESS are exactly the ones on the stack
                path = [w for w, _ in stack]
                return path[path.index(u):]
            if state == UNVISITED:
                coloring[graph.index(u)] = IN_PROGRESS
                stack.append((u, iter(graph.incident(u))))
                break
        else:
            coloring[graph.index(v)] = DONE
            stack.pop()
            if on_finish is not None:
                on_finish(v)
    return None


def find_cycle(graph, coloring=None):
    """
    input: TaskGraph, optional Coloring to reuse (it is reset first)
    output: list of vertices forming a directed cycle (v0 -> v1 -> ... -> v0), or None
    """
    coloring = _session(graph, coloring)
    for v in graph:
        if coloring[graph.index(v)] == UNVISITED:
            cycle = _dfs(graph, coloring, v, stop_on_back_edge=True)
            if cycle is not None:
                logger.debug("Back edge found, cycle: %s", cycle)
                return cycle
    return None


def is_dag(graph, coloring=None):
    """True when the graph has no directed cycle."""
    return find_cycle(graph, coloring) is None


def topological_order(graph, coloring=None):
    """
    input: TaskGraph (assumed acyclic), optional Coloring to reuse (it is reset first)
    output: list of vertices; for every edge u -> v, u comes before v
    on a cyclic graph the order is meaningless but every vertex still appears once
    """
    coloring = _session(graph, coloring)
    finish_list = deque()
    for v in graph:
        if coloring[graph.index(v)] == UNVISITED:
            _dfs(graph, coloring, v, on_finish=finish_list.appendleft)
    return list(finish_list)
