"""
query/filters.py
----------------
The property search criteria accepted by the query builder.
"""

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Union

Number = Union[int, float]


def is_present(value: Any) -> bool:
    """
    Decide whether a single filter value constrains the search.

    A value is absent when it is None, a NaN number, or the empty string.
    Zero, negative numbers and whitespace are present.
    """
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def _to_number(value: Any) -> Any:
    """Parse a numeric string such as a query-string value; other values pass through."""
    if not isinstance(value, str) or value == "":
        return value
    try:
        return int(value)
    except ValueError:
        return float(value)


# Compared numerically in SQL; mapping values for them are parsed from strings.
NUMERIC_FIELDS = ("minimum_price_per_night", "maximum_price_per_night", "minimum_rating")


@dataclass(frozen=True)
class PropertyFilters:
    """
    A user's search intent for properties. Every field is optional.

    Attributes:
        city: Case-sensitive substring matched anywhere in the property city.
        minimum_price_per_night: Exclusive lower bound, in major currency units.
        maximum_price_per_night: Exclusive upper bound, in major currency units.
        owner_id: Only properties owned by this user.
        minimum_rating: Exclusive lower bound on the average review rating.

    Ranges are not checked: a minimum above the maximum simply matches nothing.
    """
    city: Optional[str] = None
    minimum_price_per_night: Optional[Number] = None
    maximum_price_per_night: Optional[Number] = None
    owner_id: Optional[Any] = None
    minimum_rating: Optional[Number] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "PropertyFilters":
        """
        Build filters from a plain mapping, ignoring keys that are not filters.

        String values of the price and rating fields are parsed as numbers,
        so `{"minimum_price_per_night": "50"}` binds 5000 cents.

        Raises:
            ValueError: If a price or rating string is not a number.
        """
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in options.items() if key in known}
        for name in NUMERIC_FIELDS:
            if name in values:
                values[name] = _to_number(values[name])
        return cls(**values)

    def has(self, name: str) -> bool:
        """Returns True if the named field is present."""
        return is_present(getattr(self, name))

    def active_fields(self) -> list[str]:
        """Names of the present fields, in declaration order."""
        return [f.name for f in fields(self) if self.has(f.name)]

    def is_empty(self) -> bool:
        return not self.active_fields()
