"""
models/property.py
------------------
Domain model for rental properties.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

# Column order used for inserts; `id` is assigned by the database.
WRITABLE_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
    "country",
    "street",
    "city",
    "province",
    "post_code",
    "active",
)


@dataclass
class Property:
    """
    A property listed for rent.

    Attributes:
        owner_id: ID of the owning user.
        title: Listing title.
        cost_per_night: Nightly price in cents.
        city: City name; the search filter matches substrings of it.
        average_rating: Mean review rating, only set on search results.
        id: Database primary key (None for new records).
    """
    owner_id: int
    title: str
    cost_per_night: int
    city: str
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    country: Optional[str] = None
    street: Optional[str] = None
    province: Optional[str] = None
    post_code: Optional[str] = None
    active: bool = True
    average_rating: Optional[float] = None
    id: Optional[int] = None

    @property
    def price_per_night(self) -> float:
        """Nightly price in major currency units."""
        return self.cost_per_night / 100

    def column_values(self) -> list:
        """Values for WRITABLE_COLUMNS, in the same order."""
        return [getattr(self, column) for column in WRITABLE_COLUMNS]

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Property":
        """Convert a result row to a Property, ignoring columns it does not model."""
        rating = row.get("average_rating")
        return cls(
            id=row["id"],
            **{column: row[column] for column in WRITABLE_COLUMNS if column in row},
            average_rating=float(rating) if rating is not None else None,
        )

    def __str__(self) -> str:
        return f"{self.title} ({self.city}) {self.price_per_night:.2f}/night"
