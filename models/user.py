"""
models/user.py
--------------
Domain model for application users (guests and property owners).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass
class User:
    """
    A registered user.

    Attributes:
        name: Display name.
        email: Login email, unique per user.
        password: Password hash as stored by the application.
        id: Database primary key (None for new records).
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
        )

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
