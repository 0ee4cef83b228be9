"""
db/exceptions.py
----------------
Typed failures raised by the database layer.
Callers can always tell a failed query (an exception) from one that
matched nothing (an empty list or None).
"""

from typing import Optional


class DatabaseError(Exception):
    """Base class for every database layer error."""


class DatabaseConnectionError(DatabaseError):
    """The pool could not be created, or was used while closed."""


class QueryError(DatabaseError):
    """
    A statement failed on the server or in the driver.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, statement: Optional[str] = None):
        super().__init__(message)
        self.statement = statement
