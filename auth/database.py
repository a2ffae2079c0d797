"""Database operations for authentication.

Uses the users table only. Emails are stored lowercased.
"""

from uuid import UUID

from clients.postgres_client import PostgresClient
from auth.types import User


class AuthDatabase:
    """Database operations for authentication."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    @staticmethod
    def _to_user(row: dict) -> User:
        return User(
            id=UUID(row["id"]) if isinstance(row["id"], str) else row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row.get("password"),
        )

    def get_user_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive), including the password hash."""
        row = self._db.execute_single(
            """SELECT id, name, email, password
               FROM users WHERE email = lower(%s)""",
            (email,),
        )
        if row is None:
            return None
        return self._to_user(row)

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Create new user with email (lowercased) and an already-hashed password."""
        rows = self._db.execute_returning(
            """INSERT INTO users (name, email, password)
               VALUES (%s, lower(%s), %s)
               RETURNING id, name, email""",
            (name, email, password_hash),
        )
        return self._to_user(rows[0])
