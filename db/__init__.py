"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool and runs `query.Statement` objects.
The `Database` executor is created by the application and passed to the
repositories that need it; there is no module-level connection.
"""

from db.connection import Database, QueryExecutor
from db.exceptions import DatabaseConnectionError, DatabaseError, QueryError

__all__ = [
    "Database",
    "QueryExecutor",
    "DatabaseError",
    "DatabaseConnectionError",
    "QueryError",
]
