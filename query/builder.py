"""
query/builder.py
----------------
Compiles a `PropertyFilters` search into a single parameterized statement.

Clause order is fixed:

    base join -> WHERE row filters -> GROUP BY -> HAVING rating -> ORDER BY / LIMIT

Each filter is one `FilterStep` row in a table; adding a filter means adding
a row, not a branch. Filter values only ever travel as parameters.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from config import DEFAULT_PAGE_LIMIT
from query.filters import PropertyFilters
from query.statement import Statement
from utils.logger import get_logger

logger = get_logger(__name__)

# Prices are stored in cents.
MINOR_UNITS_PER_MAJOR = 100


def _identity(value: Any) -> Any:
    return value


def _contains(value: str) -> str:
    return f"%{value}%"


def _to_minor_units(value):
    return value * MINOR_UNITS_PER_MAJOR


@dataclass(frozen=True)
class FilterStep:
    """
    One optional condition of the search.

    Attributes:
        field: Name of the `PropertyFilters` attribute that enables it.
        template: SQL condition; `{}` is replaced with the placeholder.
        transform: Applied to the value before it is bound.
    """
    field: str
    template: str
    transform: Callable[[Any], Any] = _identity


# Evaluated per joined row, before grouping.
ROW_FILTERS: tuple[FilterStep, ...] = (
    FilterStep("city", "city LIKE {}", _contains),
    FilterStep("minimum_price_per_night", "cost_per_night > {}", _to_minor_units),
    FilterStep("maximum_price_per_night", "cost_per_night < {}", _to_minor_units),
    FilterStep("owner_id", "owner_id = {}"),
)

# Evaluated on the grouped rows; never allowed in WHERE.
AGGREGATE_FILTERS: tuple[FilterStep, ...] = (
    FilterStep("minimum_rating", "AVG(rating) > {}"),
)

BASE_QUERY = (
    "SELECT properties.*, AVG(property_reviews.rating) AS average_rating\n"
    "FROM properties\n"
    "JOIN property_reviews ON property_reviews.property_id = properties.id"
)
GROUP_BY = "GROUP BY properties.id"
ORDER_BY = "ORDER BY cost_per_night ASC"


class _Parameters:
    """Ordered parameter list that hands out `$n` for each appended value."""

    def __init__(self):
        self.values: list = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


def _conditions(
    steps: tuple[FilterStep, ...], filters: PropertyFilters, params: _Parameters
) -> list[str]:
    conditions = []
    for step in steps:
        if not filters.has(step.field):
            continue
        value = step.transform(getattr(filters, step.field))
        conditions.append(step.template.format(params.bind(value)))
    return conditions


def build_property_search(
    filters: Optional[PropertyFilters] = None, limit: int = DEFAULT_PAGE_LIMIT
) -> Statement:
    """
    Build the property search statement.

    Args:
        filters: Search criteria; None or an empty set matches every property.
        limit: Maximum number of rows. Not validated.

    Returns:
        A Statement whose placeholders run `$1..$N` in parameter order,
        with the limit always bound last.
    """
    filters = filters or PropertyFilters()
    params = _Parameters()
    clauses = [BASE_QUERY]

    where = _conditions(ROW_FILTERS, filters, params)
    if where:
        clauses.append("WHERE " + "\nAND ".join(where))

    clauses.append(GROUP_BY)

    having = _conditions(AGGREGATE_FILTERS, filters, params)
    if having:
        clauses.append("HAVING " + "\nAND ".join(having))

    clauses.append(ORDER_BY)
    clauses.append(f"LIMIT {params.bind(limit)}")

    statement = Statement("\n".join(clauses), params.values)
    logger.debug(f"Built property search {filters.active_fields()}: {statement}")
    return statement
