class CritPathError(Exception):
    """Base class for errors raised by the scheduling engine and its collaborators."""

    pass


class PreconditionViolation(CritPathError):
    """Raised when schedule results are queried before a successful analysis run."""

    pass


class UnknownVertexError(CritPathError, KeyError):
    """Raised when a vertex, label or index is not part of the task graph."""

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class DurationMismatchError(CritPathError):
    """Raised when the number of durations does not match the number of vertices."""

    pass


class InvalidDurationError(CritPathError, ValueError):
    """Raised when a task duration is negative or not an integer."""

    pass


class InputValidationError(CritPathError, ValueError):
    """Raised when a task sheet or text graph cannot be parsed."""

    pass
