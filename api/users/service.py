"""
User business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from pydantic import ValidationError

from core.dependencies import parse_id
from core.errors import ConflictError

from .repository import UserRepository
from .schemas import User, UserPayload

logger = logging.getLogger(__name__)


def decode_json_payload(body: bytes) -> UserPayload:
    try:
        return UserPayload.model_validate_json(body or b"")
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


async def list_users(repository: UserRepository) -> list[User]:
    return await repository.fetch_all()


async def create_user(repository: UserRepository, payload: UserPayload) -> User:
    try:
        user = await repository.insert(payload)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    logger.info("user_created id=%s", user.id)
    return user


async def get_user(repository: UserRepository, raw_id: str) -> User:
    user_id = parse_id(raw_id)
    user = await repository.fetch_by_id(user_id) if user_id is not None else None
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return user
