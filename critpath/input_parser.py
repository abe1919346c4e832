import difflib # for fuzzy matching of column names
import logging
import re # for parsing ; and , in csvs

import pandas as pd

from critpath import config
from critpath.exceptions import InputValidationError, UnknownVertexError
from critpath.graph_helpers import TaskGraph, build_graph

logger = logging.getLogger(__name__)

REQ_CPM = {"Task", "Duration", "Dependencies"}
REQ_PERT = {"Task", "Optimistic", "Most Likely", "Pessimistic", "Dependencies"}


def make_label(i):
    """0 -> A, 25 -> Z, 26 -> AA, like spreadsheet columns"""
    label = ""
    i += 1
    while i > 0:
        i, rem = divmod(i - 1, 26)
        label = chr(65 + rem) + label
    return label


def normalize_columns(df):
    """
    input: raw dataframe
    output: copy with stripped, alias-mapped, title-cased column names
    """
    df = df.copy()
    df.columns = df.columns.astype(str).str.strip()
    df = df.rename(columns=lambda col: alias_map.get(col.lower(), col))
    df.columns = df.columns.str.title()
    return df


def validate_df(df, use_pert=False):
    """
    input: dataframe with normalized columns, whether to expect 3-point estimates
    raises InputValidationError for problems that make parsing impossible
    output: list of warnings (duplicate tasks, unrecognized dependencies)
    """
    req = REQ_PERT if use_pert else REQ_CPM
    if not req.issubset(df.columns):
        missing = req - set(df.columns)
        suggestions = {}
        for col in missing:
            close = difflib.get_close_matches(col, df.columns, n=1, cutoff=0.6)
            if close:
                suggestions[col] = close[0]
        msg = f"Missing required column(s): {', '.join(sorted(missing))}" # msg if no close matches
        if suggestions:
            msg += "\n\nDid you mean:\n"
            for col, sug in suggestions.items():
                msg += f"- '{col}' instead of '{sug}'?\n"
        raise InputValidationError(msg)
    # durations must be numeric and non-negative for both cases (cpm, pert)
    for col in (["Optimistic", "Most Likely", "Pessimistic"] if use_pert else ["Duration"]):
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise InputValidationError(f"The '{col}' column should contain only numbers.")
        if (df[col] < 0).any():
            raise InputValidationError(f"{col} must be non-negative")
    warnings = []
    tasks = df["Task"].map(task_key)
    if tasks.duplicated().any():
        dupes = tasks[tasks.duplicated(keep=False)].unique() # use a 'mask' to reduce scope of df
        warnings.append(f"Duplicate tasks found: {', '.join(dupes)}")
    # check for typos/mismatch of task names
    known = set(tasks)
    invalid_deps = set()
    for deps in df["Dependencies"]:
        for dep in split_deps(deps):
            if dep not in known:
                invalid_deps.add(dep)
    if invalid_deps:
        warnings.append(f"Unrecognized dependencies found: {', '.join(sorted(invalid_deps))}")
    for w in warnings:
        logger.warning(w)
    return warnings


def load_file(uploaded_file, name=None):
    """
    input: csv, json, or excel file (path or file-like object with a .name)
    reads file according to its extension
    output: pandas dataframe
    """
    name = str(name or getattr(uploaded_file, "name", uploaded_file))
    file_type = name.split(".")[-1].lower() #retrieves extension to get the file format
    if file_type not in config.SUPPORTED_FILE_TYPES:
        raise InputValidationError("Unsupported file type. Upload only excel (.xlsx), csv or json files")
    try:
        if file_type == "csv":
            return pd.read_csv(uploaded_file)
        if file_type == "json":
            return pd.read_json(uploaded_file)
        if file_type == "xlsx":
            return pd.read_excel(uploaded_file)
    except (OSError, ValueError) as e:
        raise InputValidationError(f"Error loading file: {e}") from e


def task_key(value):
    """' Design' -> 'design'; 1.0 -> '1' (pandas reads id columns with blanks as float)"""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().lower()


def split_deps(dep_str):
    """'a; b, c' -> ['a', 'b', 'c'], lower-cased, empties dropped"""
    if pd.isna(dep_str):
        return []
    if not isinstance(dep_str, str):
        # a single numeric id
        return [task_key(dep_str)]
    return [d.strip().lower() for d in re.split(r"[;,]", dep_str) if d.strip()]


def _labels(df):
    df = df.copy()
    # normalize task names to prevent case-related errors
    df["Task"] = df["Task"].map(task_key)
    df["Label"] = [make_label(i) for i in range(len(df))]
    #dict that maps label to task-> for output and visualization
    label_to_task = {k: v for (k, v) in zip(df["Label"], df["Task"])}
    #dict that maps task to label-> for input processing
    task_to_label = {v: k for (k, v) in label_to_task.items()}
    return df, label_to_task, task_to_label


def _edges(df, task_to_label):
    #list containing the edge pairs (dependencies -> task)
    edge_list = []
    for _, row in df.iterrows():
        for dep in split_deps(row["Dependencies"]):
            if dep not in task_to_label:
                raise UnknownVertexError(f"Unknown dependency: '{dep}'. Please check for typos or case mismatches.")
            edge_list.append((task_to_label[dep], row["Label"]))
    return edge_list


def parse_df(df):
    """
    input: dataframe containing task (string), duration (int), and dependencies (list of strings)
    output:
        - duration_dict: {label: duration}
        - edge_list: [(dep_label, task_label), ...]
        - label_to_task: {label: task_name}
    """
    df, label_to_task, task_to_label = _labels(df)
    duration_dict = {k: v for (k, v) in zip(df["Label"], df["Duration"])}
    edge_list = _edges(df, task_to_label)
    return duration_dict, edge_list, label_to_task


def parse_pert_df(df):
    """
    input: dataframe containing:
        - task (string)
        - optimistic (int)
        - most likely (int)
        - pessimistic (int)
        - dependencies (list of strings)
    output:
        - te_dict: {label: expected time}
        - edge_list: [(dep_label, task_label), ...]
        - label_to_task: {label: task_name}
        - var_dict: {label: variance}
    """
    df, label_to_task, task_to_label = _labels(df)
    te_dict = {}
    var_dict = {}
    for _, row in df.iterrows():
        O = row["Optimistic"]
        M = row["Most Likely"]
        P = row["Pessimistic"]
        lab = row["Label"]
        te_dict[lab] = (O + 4 * M + P) / 6 # TE = (O+4M+P)/6
        var_dict[lab] = ((P - O) / 6) ** 2
    edge_list = _edges(df, task_to_label)
    return te_dict, edge_list, label_to_task, var_dict


def round_durations(duration_dict):
    """the engine works on whole time units; halves round up"""
    rounded = {}
    for label, dur in duration_dict.items():
        if pd.isna(dur):
            raise InputValidationError(f"Task {label} has no duration")
        rounded[label] = int(float(dur) + 0.5)
        if rounded[label] != dur:
            logger.debug("Rounded duration of %s from %s to %d", label, dur, rounded[label])
    return rounded


def read_directed_graph(text):
    """
    input: compact graph description
        "n m", then m edges "u v w" (1-based vertices, w ignored), then n durations
    output: TaskGraph with vertices 1..n, list of durations by vertex index
    """
    tokens = text.split()
    try:
        nums = [int(t) for t in tokens]
    except ValueError as e:
        raise InputValidationError(f"Graph description must contain only integers: {e}") from None
    if len(nums) < 2:
        raise InputValidationError("Graph description must start with vertex and edge counts")
    n, m = nums[0], nums[1]
    if n < 0 or m < 0:
        raise InputValidationError("Vertex and edge counts must be non-negative")
    expected = 2 + 3 * m + n
    if len(nums) < expected:
        raise InputValidationError(f"Expected {expected} integers, got {len(nums)}")
    if len(nums) > expected:
        logger.warning("Ignoring %d trailing values in graph description", len(nums) - expected)
    edge_list = []
    for k in range(m):
        u, v, _ = nums[2 + 3 * k: 5 + 3 * k]
        for end in (u, v):
            if not 1 <= end <= n:
                raise InputValidationError(f"Edge ({u}, {v}) refers to vertex outside 1..{n}")
        edge_list.append((u, v))
    durations = nums[2 + 3 * m: expected]
    if any(d < 0 for d in durations):
        raise InputValidationError("Durations must be non-negative")
    G = build_graph({i + 1: durations[i] for i in range(n)}, edge_list)
    return TaskGraph(G), durations


# == ALIAS MAP FOR SEMANTIC CHECKING ==
alias_map = {
    # task synonyms
    "activity": "task",
    "activities": "task",
    "work": "task",
    "job": "task",
    "item": "task",
    "task name": "task",

    # duration synonyms
    "time": "duration",
    "length": "duration",
    "days": "duration",
    "weeks": "duration",
    "period": "duration",
    "estimate": "duration",
    "time req": "duration",
    "time required": "duration",

    # dependencies synonyms
    "dependency": "dependencies",
    "predecessor": "dependencies",
    "predecessors": "dependencies",
    "depends on": "dependencies",
    "required before": "dependencies",

    # pert synonyms
    "optimistic time": "optimistic",
    "most likely time": "most likely",
    "pessimistic time": "pessimistic",
    "o": "optimistic",
    "m": "most likely",
    "p": "pessimistic",
    "best case": "optimistic",
    "worst case": "pessimistic"
}
