# errors.py
"""Typed failures raised by the feature pipeline.

Unknown tokens are never an error; they are dropped during aggregation.
"""


class DocvecError(Exception):
    """Base class for every pipeline failure."""


class DimensionMismatch(DocvecError, ValueError):
    """A vector's length differs from the table's fixed dimension."""

    def __init__(self, token: str, expected: int, actual: int):
        self.token = token
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"vector for token {token!r} has length {actual}, expected {expected}"
        )


class DegenerateColumn(DocvecError, ValueError):
    """A feature column has zero (or undefined) standard deviation."""

    def __init__(self, column, reason: str = "zero standard deviation"):
        self.column = column
        self.reason = reason
        super().__init__(f"column {column!r} cannot be standardized: {reason}")


class EmptyInput(DocvecError, ValueError):
    """Nothing to process."""

    def __init__(self, what: str = "document collection"):
        self.what = what
        super().__init__(f"{what} is empty")
