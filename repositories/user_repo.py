"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import QueryExecutor
from models.user import User
from query import statements
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for lookups and inserts on the users table."""

    def __init__(self, db: QueryExecutor):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email.

        Returns:
            User or None.
        """
        row = self.db.fetch_one(statements.user_by_email(email))
        return User.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a user by primary key.

        Returns:
            User or None.
        """
        row = self.db.fetch_one(statements.user_by_id(user_id))
        return User.from_row(row) if row else None

    def add(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The User to persist; its `id` is ignored.

        Returns:
            The stored User with its `id` populated.
        """
        row = self.db.execute_returning(statements.insert_user(user.name, user.email, user.password))
        created = User.from_row(row)
        logger.info(f"Added user #{created.id}")
        return created
