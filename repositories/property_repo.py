"""
repositories/property_repo.py
------------------------------
Data access layer for rental properties.
Searches go through the dynamic query builder; inserts are fixed-shape.
"""

from typing import Optional

from config import DEFAULT_PAGE_LIMIT
from db.connection import QueryExecutor
from models.property import Property
from query import statements
from query.builder import build_property_search
from query.filters import PropertyFilters
from utils.logger import get_logger

logger = get_logger(__name__)


class PropertyRepository:
    """Repository for searching and adding properties."""

    def __init__(self, db: QueryExecutor):
        self.db = db

    def search(
        self, filters: Optional[PropertyFilters] = None, limit: int = DEFAULT_PAGE_LIMIT
    ) -> list[Property]:
        """
        Find properties matching every present filter, cheapest first.

        Only properties with at least one review are returned, since the
        average rating comes from an inner join on the reviews.

        Args:
            filters: Search criteria; None matches everything.
            limit: Maximum number of properties.

        Returns:
            List of Property objects with `average_rating` set.

        Raises:
            QueryError: If the search failed.
        """
        rows = self.db.fetch_all(build_property_search(filters, limit))
        return [Property.from_row(r) for r in rows]

    def add(self, prop: Property) -> Property:
        """
        Insert a new property.

        Returns:
            The stored Property with its `id` populated.
        """
        row = self.db.execute_returning(statements.insert_property(prop))
        created = Property.from_row(row)
        logger.info(f"Added property #{created.id} for owner {created.owner_id}")
        return created
