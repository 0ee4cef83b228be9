"""
query/ - Statement Layer
========================
Builds parameterized PostgreSQL statements from search criteria.
Nothing in this package touches the database: every function returns a
`Statement` that the executor in `db/` runs.
"""

from query.builder import build_property_search
from query.filters import PropertyFilters
from query.statement import Statement

__all__ = ["PropertyFilters", "Statement", "build_property_search"]
