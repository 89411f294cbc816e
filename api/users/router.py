"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from core.dependencies import get_user_repository

from . import service
from .repository import UserRepository
from .schemas import User

router = APIRouter(prefix="/api/users")


@router.get("", response_model=list[User])
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[User]:
    return await service.list_users(repository)


@router.post("", response_model=User)
async def create_user(
    request: Request,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    payload = service.decode_json_payload(await request.body())
    return await service.create_user(repository, payload)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> User:
    return await service.get_user(repository, user_id)
