"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
"""

from config import DEFAULT_PAGE_LIMIT
from db.connection import QueryExecutor
from models.reservation import GuestReservation, Reservation
from query import statements
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for listing and creating reservations."""

    def __init__(self, db: QueryExecutor):
        self.db = db

    def get_for_guest(self, guest_id: int, limit: int = DEFAULT_PAGE_LIMIT) -> list[GuestReservation]:
        """
        List a guest's reservations, earliest stay first.

        Returns:
            List of GuestReservation objects; empty if the guest has none.
        """
        rows = self.db.fetch_all(statements.reservations_for_guest(guest_id, limit))
        return [GuestReservation.from_row(r) for r in rows]

    def add(self, reservation: Reservation) -> Reservation:
        """
        Insert a new reservation.

        Returns:
            The stored Reservation with its `id` populated.
        """
        row = self.db.execute_returning(
            statements.insert_reservation(
                reservation.guest_id,
                reservation.property_id,
                reservation.start_date,
                reservation.end_date,
            )
        )
        created = Reservation.from_row(row)
        logger.info(f"Added reservation #{created.id} for guest {created.guest_id}")
        return created
