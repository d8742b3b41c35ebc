"""Error types raised by the CNE optimizer.

- CNEError: Base class for all optimizer errors
- InvalidConfiguration: Rejected configuration, raised before any evaluation
- EvaluatorFailure: The objective function failed for a candidate
- PopulationInvariantError: Internal elite/dropout bookkeeping is inconsistent
"""


class CNEError(Exception):
    """Base class for errors raised by cne_optim."""


class InvalidConfiguration(CNEError, ValueError):
    """Raised when optimizer settings or the starting iterate are unusable.

    Always raised eagerly, before the first candidate is evaluated, so the
    caller's iterate is never partially modified.
    """


class EvaluatorFailure(CNEError, RuntimeError):
    """Raised when the objective function fails for a candidate.

    Attributes:
        index: Population index of the failing candidate, or None when the
            failure could not be attributed to a candidate (e.g. a parallel
            worker died).
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index

    def __reduce__(self):
        # Keep index when re-raised from a joblib worker process
        return (type(self), (self.args[0], self.index))


class PopulationInvariantError(CNEError, AssertionError):
    """Raised when the elite/dropout partition cannot satisfy reproduction."""
