from critpath.engine import PERT, NotADag, ScheduleAnalysis, run
from critpath.graph_helpers import TaskGraph, build_graph

__all__ = ["PERT", "NotADag", "ScheduleAnalysis", "run", "TaskGraph", "build_graph"]
