"""
query/statements.py
-------------------
Fixed-shape statements: lookups and inserts whose text never changes,
only the bound values.
"""

from datetime import date

from config import DEFAULT_PAGE_LIMIT
from models.property import WRITABLE_COLUMNS, Property
from query.statement import Statement

# ── USERS ─────────────────────────────────────────────────


def user_by_email(email: str) -> Statement:
    return Statement("SELECT * FROM users WHERE email = $1", [email])


def user_by_id(user_id: int) -> Statement:
    return Statement("SELECT * FROM users WHERE id = $1", [user_id])


def insert_user(name: str, email: str, password: str) -> Statement:
    return Statement(
        "INSERT INTO users (name, email, password)\n"
        "VALUES ($1, $2, $3)\n"
        "RETURNING *",
        [name, email, password],
    )


# ── RESERVATIONS ──────────────────────────────────────────


def reservations_for_guest(guest_id: int, limit: int = DEFAULT_PAGE_LIMIT) -> Statement:
    """A guest's reservations with the booked property and its average rating."""
    return Statement(
        "SELECT properties.*, reservations.start_date, reservations.end_date,\n"
        "       AVG(property_reviews.rating) AS average_rating\n"
        "FROM reservations\n"
        "JOIN properties ON reservations.property_id = properties.id\n"
        "LEFT JOIN property_reviews ON property_reviews.property_id = properties.id\n"
        "WHERE reservations.guest_id = $1\n"
        "GROUP BY properties.id, reservations.id\n"
        "ORDER BY reservations.start_date\n"
        "LIMIT $2",
        [guest_id, limit],
    )


def insert_reservation(guest_id: int, property_id: int, start_date: date, end_date: date) -> Statement:
    return Statement(
        "INSERT INTO reservations (guest_id, property_id, start_date, end_date)\n"
        "VALUES ($1, $2, $3, $4)\n"
        "RETURNING *",
        [guest_id, property_id, start_date, end_date],
    )


# ── PROPERTIES ────────────────────────────────────────────


def insert_property(prop: Property) -> Statement:
    """Insert every writable column of `prop`."""
    placeholders = ", ".join(f"${i}" for i in range(1, len(WRITABLE_COLUMNS) + 1))
    return Statement(
        f"INSERT INTO properties ({', '.join(WRITABLE_COLUMNS)})\n"
        f"VALUES ({placeholders})\n"
        "RETURNING *",
        prop.column_values(),
    )
