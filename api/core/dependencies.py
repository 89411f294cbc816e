"""
FastAPI dependencies shared by the API and website routers.
"""

from __future__ import annotations

from fastapi import Depends, Request

from acronyms.repository import AcronymRepository
from users.repository import UserRepository

from .db import Database

# Upper bound of a PostgreSQL SERIAL.
MAX_ID = 2**31 - 1


def parse_id(raw: str | None) -> int | None:
    """
    Parse a path id. Anything that is not a positive integer yields None,
    which callers treat exactly like a missing row.
    """
    value = (raw or "").strip()
    if not (value.isascii() and value.isdigit()):
        return None
    parsed = int(value)
    return parsed if 0 < parsed <= MAX_ID else None


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_acronym_repository(database: Database = Depends(get_database)) -> AcronymRepository:
    return AcronymRepository(database)


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(database)
