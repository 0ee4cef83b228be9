"""
models/reservation.py
---------------------
Domain models for reservations.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from models.property import Property


@dataclass
class Reservation:
    """
    A guest's booking of a property.

    Attributes:
        guest_id: ID of the booking user.
        property_id: ID of the booked property.
        start_date: First night.
        end_date: Checkout day.
        id: Database primary key (None for new records).
    """
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Reservation":
        return cls(
            id=row["id"],
            guest_id=row["guest_id"],
            property_id=row["property_id"],
            start_date=row["start_date"],
            end_date=row["end_date"],
        )

    def nights(self) -> int:
        return (self.end_date - self.start_date).days


@dataclass
class GuestReservation:
    """A row of a guest's reservation listing: the property and the stay dates."""
    property: Property
    start_date: date
    end_date: date

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "GuestReservation":
        return cls(
            property=Property.from_row(row),
            start_date=row["start_date"],
            end_date=row["end_date"],
        )

    def __str__(self) -> str:
        return f"{self.property.title}: {self.start_date} -> {self.end_date}"
