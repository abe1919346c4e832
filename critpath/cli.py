import argparse
import logging
import sys
from pathlib import Path

from critpath import config
from critpath.engine import run
from critpath.exceptions import CritPathError
from critpath.graph_helpers import TaskGraph, build_graph
from critpath.input_parser import (
    load_file, normalize_columns, parse_df, parse_pert_df, read_directed_graph, round_durations, validate_df,
)

logger = logging.getLogger(__name__)


def load_graph(path, use_pert=False):
    """
    input: path to a task sheet or text graph (None for the built-in sample)
    output: TaskGraph, durations by vertex index, {vertex: display name} or None
    """
    if path is None:
        graph, durations = read_directed_graph(config.SAMPLE_GRAPH)
        return graph, durations, None
    path = Path(path)
    if path.suffix.lstrip(".").lower() in config.TEXT_GRAPH_TYPES:
        graph, durations = read_directed_graph(path.read_text())
        return graph, durations, None
    df = normalize_columns(load_file(path))
    validate_df(df, use_pert=use_pert)
    if use_pert:
        duration_dict, edge_list, label_to_task, _ = parse_pert_df(df)
    else:
        duration_dict, edge_list, label_to_task = parse_df(df)
    duration_dict = round_durations(duration_dict)
    graph = TaskGraph(build_graph(duration_dict, edge_list))
    return graph, [duration_dict[u] for u in graph], label_to_task


def main(argv=None):
    ap = argparse.ArgumentParser(prog="critpath", description="Critical path analysis of a task graph")
    ap.add_argument("file", nargs="?", help="task sheet (.csv, .json, .xlsx) or text graph (.txt); sample graph if omitted")
    ap.add_argument("--pert", action="store_true", help="read optimistic / most likely / pessimistic estimates")
    ap.add_argument("--log-level", default=config.LOG_LEVEL, type=str.upper, choices=config.LOG_LEVELS,
                    help="logging level (default: %(default)s)")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )

    try:
        graph, durations, label_to_task = load_graph(args.file, use_pert=args.pert)
        result = run(graph, durations)
    except (CritPathError, OSError) as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not result:
        print(result)
        return 1

    name = (lambda u: label_to_task.get(u, u)) if label_to_task else str
    print("Number of critical vertices: " + str(result.num_critical()))
    print("u\tEC\tLC\tSlack\tCritical")
    for u in graph:
        print(f"{name(u)}\t{result.ec(u)}\t{result.lc(u)}\t{result.slack(u)}\t{result.critical(u)}")
    print(f"Critical path length: {result.critical_path_length()}")
    print("Critical path: " + " -> ".join(str(name(u)) for u in result.critical_path()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
