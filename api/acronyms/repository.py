"""
Acronym persistence (raw SQL).

`AcronymRepository` is the only code that talks to the `acronyms` table. Column
names in filters and sorts come from a fixed allowlist; values always go
through positional parameters.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import asyncpg

from core.db import Database
from core.errors import NotFoundError, ReferenceViolationError, StoreError
from users.schemas import User

from .schemas import Acronym, AcronymPayload

# Wire/field name -> column name.
COLUMNS = {
    "id": "id",
    "short": "short",
    "long": "long",
    "userID": "user_id",
    "user_id": "user_id",
}

_SELECT = 'SELECT id, "short", "long", user_id FROM acronyms'


class SortDirection(str, enum.Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class Predicate:
    field: str
    value: Any


def column_for(field: str) -> str:
    try:
        return COLUMNS[field]
    except KeyError:
        raise ValueError(f"Unknown acronym field: {field!r}") from None


def build_or_filter(predicates: list[Predicate]) -> tuple[str, list[Any]]:
    """
    Return a `WHERE` clause matching rows where any predicate holds.
    """
    clauses = []
    args: list[Any] = []
    for index, predicate in enumerate(predicates, start=1):
        clauses.append(f'"{column_for(predicate.field)}" = ${index}')
        args.append(predicate.value)
    return "WHERE " + " OR ".join(clauses), args


def build_order_by(field: str, direction: SortDirection) -> str:
    column = column_for(field)
    order = "ASC" if SortDirection(direction) is SortDirection.ASCENDING else "DESC"
    # id as tiebreaker keeps equal keys in insertion order.
    if column == "id":
        return f"ORDER BY id {order}"
    return f'ORDER BY "{column}" {order}, id ASC'


class AcronymRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def fetch_all(self) -> list[Acronym]:
        rows = await self._db.fetch_all(f"{_SELECT} ORDER BY id ASC")
        return [Acronym.from_row(row) for row in rows]

    async def fetch_by_id(self, acronym_id: int) -> Acronym | None:
        row = await self._db.fetch_one(f"{_SELECT} WHERE id = $1", acronym_id)
        return Acronym.from_row(row) if row is not None else None

    async def insert(self, payload: AcronymPayload) -> Acronym:
        try:
            row = await self._db.fetch_one(
                """
                INSERT INTO acronyms ("short", "long", user_id)
                VALUES ($1, $2, $3)
                RETURNING id, "short", "long", user_id
                """,
                payload.short,
                payload.long,
                payload.user_id,
            )
        except asyncpg.ForeignKeyViolationError as exc:
            raise ReferenceViolationError(f"User {payload.user_id} does not exist.") from exc
        except asyncpg.PostgresError as exc:
            raise StoreError("Failed to insert acronym.") from exc
        if row is None:
            raise StoreError("Failed to insert acronym.")
        return Acronym.from_row(row)

    async def update(self, acronym_id: int, payload: AcronymPayload) -> Acronym:
        """
        Overwrite short/long/userID of an existing row. Last writer wins.
        """
        try:
            row = await self._db.fetch_one(
                """
                UPDATE acronyms
                SET "short" = $2,
                    "long" = $3,
                    user_id = $4
                WHERE id = $1
                RETURNING id, "short", "long", user_id
                """,
                acronym_id,
                payload.short,
                payload.long,
                payload.user_id,
            )
        except asyncpg.ForeignKeyViolationError as exc:
            raise ReferenceViolationError(f"User {payload.user_id} does not exist.") from exc
        except asyncpg.PostgresError as exc:
            raise StoreError("Failed to update acronym.") from exc
        if row is None:
            raise NotFoundError(f"Acronym {acronym_id} not found.")
        return Acronym.from_row(row)

    async def delete(self, acronym_id: int) -> None:
        row = await self._db.fetch_one(
            """
            DELETE FROM acronyms
            WHERE id = $1
            RETURNING id
            """,
            acronym_id,
        )
        if row is None:
            raise NotFoundError(f"Acronym {acronym_id} not found.")

    async def filter_or(self, predicates: list[Predicate]) -> list[Acronym]:
        if not predicates:
            return []
        where, args = build_or_filter(predicates)
        rows = await self._db.fetch_all(f"{_SELECT} {where} ORDER BY id ASC", *args)
        return [Acronym.from_row(row) for row in rows]

    async def sort_by(
        self,
        field: str,
        direction: SortDirection = SortDirection.ASCENDING,
    ) -> list[Acronym]:
        rows = await self._db.fetch_all(f"{_SELECT} {build_order_by(field, direction)}")
        return [Acronym.from_row(row) for row in rows]

    async def fetch_first(self) -> Acronym | None:
        row = await self._db.fetch_one(f"{_SELECT} ORDER BY id ASC LIMIT 1")
        return Acronym.from_row(row) if row is not None else None

    async def fetch_related_user(self, acronym: Acronym) -> User | None:
        row = await self._db.fetch_one(
            """
            SELECT id, name, username
            FROM users
            WHERE id = $1
            """,
            acronym.user_id,
        )
        return User.from_row(row) if row is not None else None
