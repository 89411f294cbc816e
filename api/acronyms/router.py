"""
Acronym JSON API endpoints.

Fixed segments (`search`, `first`, `sorted`) are registered before the
`{acronym_id}` routes so they are never captured as ids.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response, status

from core.dependencies import get_acronym_repository
from users.schemas import User

from . import service
from .repository import AcronymRepository
from .schemas import Acronym

router = APIRouter(prefix="/api/acronym")


@router.get("", response_model=list[Acronym])
async def list_acronyms(
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> list[Acronym]:
    return await service.list_acronyms(repository)


@router.post("", response_model=Acronym)
async def create_acronym(
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> Acronym:
    payload = service.decode_json_payload(await request.body())
    return await service.create_acronym(repository, payload)


@router.get("/search", response_model=list[Acronym])
async def search_acronyms(
    term: str | None = Query(default=None),
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> list[Acronym]:
    return await service.search_acronyms(repository, term)


@router.get("/first", response_model=Acronym)
async def first_acronym(
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> Acronym:
    return await service.first_acronym(repository)


@router.get("/sorted", response_model=list[Acronym])
async def sorted_acronyms(
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> list[Acronym]:
    return await service.sorted_acronyms(repository)


@router.get("/{acronym_id}", response_model=Acronym)
async def get_acronym(
    acronym_id: str,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> Acronym:
    return await service.get_acronym(repository, acronym_id)


@router.put("/{acronym_id}", response_model=Acronym)
async def update_acronym(
    acronym_id: str,
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> Acronym:
    return await service.update_acronym(repository, acronym_id, await request.body())


@router.delete("/{acronym_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_acronym(
    acronym_id: str,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> Response:
    await service.delete_acronym(repository, acronym_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{acronym_id}/user", response_model=User)
async def get_acronym_user(
    acronym_id: str,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> User:
    return await service.acronym_user(repository, acronym_id)
