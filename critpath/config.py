import os

# === Logging ===
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVEL = os.environ.get("CRITPATH_LOG_LEVEL", "WARNING").upper()
if LOG_LEVEL not in LOG_LEVELS:
    LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# === Input handling ===
SUPPORTED_FILE_TYPES = ["csv", "json", "xlsx"]
TEXT_GRAPH_TYPES = ["txt"]
LARGE_PROJECT_ROWS = 500

# sample graph used by the cli when no file is given:
# "n m" header, m lines of "u v w" (1-based, weight unused), then n durations
SAMPLE_GRAPH = (
    "10 13   1 2 1   2 4 1   2 5 1   3 5 1   3 6 1   4 7 1   5 7 1   5 8 1   "
    "6 8 1   6 9 1   7 10 1   8 10 1   9 10 1      0 3 2 3 2 1 3 2 4 1"
)
