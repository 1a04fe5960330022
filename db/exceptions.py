"""
db/exceptions.py
----------------
The single error kind raised by the data access layer.
"""

from typing import Optional


class DataAccessError(Exception):
    """
    Raised when a database statement (or acquiring a connection) fails.

    Constraint violations, lost connections and malformed SQL all surface
    as this one type; the original driver error is kept in `cause`.

    Attributes:
        message: What the repository was trying to do.
        cause: The underlying exception, if any.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} Cause: {self.cause}"
