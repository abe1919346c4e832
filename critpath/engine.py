"""
PERT engine: cycle check, topological order, forward and backward passes,
and the queries that are valid once those have run.

Typical use::

    result = run(graph, durations)
    if not result:
        print("not a DAG:", result.cycle)
    else:
        print(result.critical_path_length(), result.num_critical())
"""
import logging
import numbers
from dataclasses import dataclass, field, replace

import networkx as nx
import pandas as pd

from critpath.cpm import backward_pass, calculate_slack, critical_chain, forward_pass, make_records
from critpath.exceptions import DurationMismatchError, InvalidDurationError, PreconditionViolation
from critpath.graph_helpers import TaskGraph
from critpath.traversal import Coloring, find_cycle, topological_order

logger = logging.getLogger(__name__)


def as_task_graph(graph):
    if isinstance(graph, TaskGraph):
        return graph
    if isinstance(graph, nx.DiGraph):
        return TaskGraph(graph)
    raise TypeError(f"Expected TaskGraph or networkx.DiGraph, got {type(graph).__name__}")


@dataclass
class NotADag:
    """Outcome of an analysis on a graph with a directed cycle."""

    cycle: list = field(default_factory=list)

    def __bool__(self):
        return False

    def __str__(self):
        if not self.cycle:
            return "Invalid graph: not a DAG"
        path = " -> ".join(str(v) for v in self.cycle + self.cycle[:1])
        return f"Invalid graph: not a DAG (cycle {path})"


class ScheduleAnalysis:
    """
    Read-only results of a successful run. Only obtainable from PERT.analysis
    or run(); holds its own copies of the records so later edits to the engine
    do not change it.
    """

    def __init__(self, graph, records, order, project_length):
        self.graph = graph
        self._records = records
        self.order = list(order)
        self.project_length = project_length

    def __bool__(self):
        return True

    def _get(self, u):
        return self._records[self.graph.index(u)]

    def duration(self, u):
        return self._get(u).duration

    def es(self, u):
        """earliest start of u"""
        return self._get(u).es

    def ec(self, u):
        """earliest completion of u"""
        return self._get(u).ec

    def ls(self, u):
        """latest start of u"""
        return self._get(u).ls

    def lc(self, u):
        """latest completion of u"""
        return self._get(u).lc

    def slack(self, u):
        return self._get(u).slack

    def critical(self, u):
        return self.slack(u) == 0

    def critical_path_length(self):
        return max((r.ec for r in self._records), default=0)

    def num_critical(self):
        return sum(1 for u in self.graph if self.critical(u))

    def critical_vertices(self):
        _, cp = calculate_slack(self.graph, self._records, self.order)
        return cp

    def slack_dict(self):
        slack_dict, _ = calculate_slack(self.graph, self._records, self.order)
        return slack_dict

    def critical_path(self):
        return critical_chain(self.graph, self._records, self.order)

    def to_dataframe(self, label_to_task=None):
        """
        input: optional {vertex: display name} mapping
        output: pandas dataframe with one row per task, in topological order
        """
        rows = []
        for u in self.order:
            r = self._get(u)
            rows.append({
                "Task": label_to_task.get(u, u) if label_to_task else u,
                "Duration": r.duration,
                "ES": r.es,
                "EC": r.ec,
                "LS": r.ls,
                "LC": r.lc,
                "Slack": r.slack,
                "Critical": r.slack == 0,
            })
        return pd.DataFrame(rows, columns=["Task", "Duration", "ES", "EC", "LS", "LC", "Slack", "Critical"])


class PERT:
    """
    Critical path engine bound to one task graph.

    Set durations with set_duration, then call run_pert(). The query methods
    raise PreconditionViolation until a run succeeds, and again after a run
    that found a cycle.
    """

    def __init__(self, graph):
        self.graph = as_task_graph(graph)
        self._records = make_records(self.graph.size())
        self._coloring = Coloring(self.graph.size())
        self._analysis = None
        self.cycle = None

    def set_duration(self, u, d):
        # bool is an Integral, but never a duration
        if isinstance(d, bool) or not isinstance(d, numbers.Integral):
            raise InvalidDurationError(f"Duration of {u!r} must be an integer, got {d!r}")
        if d < 0:
            raise InvalidDurationError(f"Duration of {u!r} must be non-negative, got {d}")
        self._records[self.graph.index(u)].duration = int(d)
        # an edit invalidates any earlier result
        self._analysis = None

    def get_duration(self, u):
        return self._records[self.graph.index(u)].duration

    def is_dag(self):
        self.cycle = find_cycle(self.graph, self._coloring)
        return self.cycle is None

    def topological_order(self):
        return topological_order(self.graph, self._coloring)

    def run_pert(self):
        """
        Run the full analysis.
        output: True on success; False when the graph has a cycle (see self.cycle)
        """
        self._analysis = None
        for r in self._records:
            r.reset()
        if not self.is_dag():
            logger.warning("Task graph is not a DAG, cycle: %s", self.cycle)
            return False
        order = self.topological_order()
        project_length = forward_pass(self.graph, self._records, order)
        backward_pass(self.graph, self._records, order, project_length)
        self._analysis = ScheduleAnalysis(
            self.graph,
            [replace(r) for r in self._records],
            order,
            project_length,
        )
        logger.info(
            "Analysed %d tasks: critical path length %d, %d critical",
            self.graph.size(), project_length, self._analysis.num_critical(),
        )
        return True

    @property
    def analysis(self):
        if self._analysis is None:
            raise PreconditionViolation("No successful analysis: call run_pert() on an acyclic graph first")
        return self._analysis

    # The following methods are valid only after run_pert() returned True.

    def ec(self, u):
        return self.analysis.ec(u)

    def lc(self, u):
        return self.analysis.lc(u)

    def es(self, u):
        return self.analysis.es(u)

    def ls(self, u):
        return self.analysis.ls(u)

    def slack(self, u):
        return self.analysis.slack(u)

    def critical(self, u):
        return self.analysis.critical(u)

    def critical_path_length(self):
        return self.analysis.critical_path_length()

    def num_critical(self):
        return self.analysis.num_critical()


def run(graph, durations):
    """
    input: TaskGraph or networkx.DiGraph, durations indexed by vertex index
           (a sequence, or a dict keyed by vertex)
    output: ScheduleAnalysis, or NotADag when the graph has a cycle
    """
    p = PERT(graph)
    g = p.graph
    if isinstance(durations, dict):
        for u in g:
            if u not in durations:
                raise DurationMismatchError(f"No duration given for task {u!r}")
            p.set_duration(u, durations[u])
    else:
        durations = list(durations)
        if len(durations) < g.size():
            raise DurationMismatchError(f"Got {len(durations)} durations for {g.size()} tasks")
        for u in g:
            p.set_duration(u, durations[g.index(u)])
    if not p.run_pert():
        return NotADag(p.cycle)
    return p.analysis
