"""
User persistence helpers.
"""

from __future__ import annotations

import asyncpg

from core.db import Database
from core.errors import ConflictError, StoreError

from .schemas import User, UserPayload


def normalize_username(username: str) -> str:
    return (username or "").strip().lower()


class UserRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def fetch_all(self) -> list[User]:
        rows = await self._db.fetch_all(
            """
            SELECT id, name, username
            FROM users
            ORDER BY id ASC
            """
        )
        return [User.from_row(row) for row in rows]

    async def fetch_by_id(self, user_id: int) -> User | None:
        row = await self._db.fetch_one(
            """
            SELECT id, name, username
            FROM users
            WHERE id = $1
            """,
            user_id,
        )
        return User.from_row(row) if row is not None else None

    async def insert(self, payload: UserPayload) -> User:
        try:
            row = await self._db.fetch_one(
                """
                INSERT INTO users (name, username)
                VALUES ($1, $2)
                RETURNING id, name, username
                """,
                payload.name.strip(),
                normalize_username(payload.username),
            )
        except asyncpg.UniqueViolationError as exc:
            raise ConflictError(f"Username {payload.username!r} is already taken.") from exc
        except asyncpg.PostgresError as exc:
            raise StoreError("Failed to create user.") from exc
        if row is None:
            raise StoreError("Failed to create user.")
        return User.from_row(row)
