"""
Acronym business logic.

Translates repository outcomes into HTTP semantics:
- missing rows and unparsable ids -> 404
- malformed bodies, missing query params, unknown userID -> 400
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from pydantic import ValidationError

from core.dependencies import parse_id
from core.errors import NotFoundError, ReferenceViolationError
from users.schemas import User

from .repository import AcronymRepository, Predicate, SortDirection
from .schemas import Acronym, AcronymPayload

logger = logging.getLogger(__name__)


def decode_payload(data: Any) -> AcronymPayload:
    """
    Validate an already-parsed JSON/form mapping into an `AcronymPayload`.
    """
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Body must be an object with short, long and userID.",
        )
    try:
        return AcronymPayload.model_validate(data)
    except ValidationError as exc:
        raise _invalid_body(exc) from exc


def decode_json_payload(body: bytes) -> AcronymPayload:
    """
    Parse and validate a raw JSON body. Non-object JSON fails validation too.
    """
    try:
        return AcronymPayload.model_validate_json(body or b"")
    except ValidationError as exc:
        raise _invalid_body(exc) from exc


def _invalid_body(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=exc.errors(include_url=False, include_context=False, include_input=False),
    )


def _not_found(detail: str = "Acronym not found.") -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _unknown_user(exc: ReferenceViolationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


async def resolve_acronym(repository: AcronymRepository, raw_id: str) -> Acronym:
    acronym_id = parse_id(raw_id)
    if acronym_id is None:
        raise _not_found()
    acronym = await repository.fetch_by_id(acronym_id)
    if acronym is None:
        raise _not_found()
    return acronym


async def list_acronyms(repository: AcronymRepository) -> list[Acronym]:
    return await repository.fetch_all()


async def create_acronym(repository: AcronymRepository, payload: AcronymPayload) -> Acronym:
    try:
        acronym = await repository.insert(payload)
    except ReferenceViolationError as exc:
        raise _unknown_user(exc) from exc
    logger.info("acronym_created id=%s user_id=%s", acronym.id, acronym.user_id)
    return acronym


async def get_acronym(repository: AcronymRepository, raw_id: str) -> Acronym:
    return await resolve_acronym(repository, raw_id)


async def update_acronym(
    repository: AcronymRepository,
    raw_id: str,
    body: bytes | dict,
) -> Acronym:
    """
    `body` is a raw JSON body or an already-parsed form mapping. The id is
    checked before the body so an unknown id is always a 404.
    """
    acronym = await resolve_acronym(repository, raw_id)
    payload = decode_json_payload(body) if isinstance(body, (bytes, bytearray)) else decode_payload(body)
    try:
        acronym = await repository.update(acronym.id, payload)
    except NotFoundError as exc:
        raise _not_found() from exc
    except ReferenceViolationError as exc:
        raise _unknown_user(exc) from exc
    logger.info("acronym_updated id=%s", acronym.id)
    return acronym


async def delete_acronym(repository: AcronymRepository, raw_id: str) -> None:
    acronym_id = parse_id(raw_id)
    if acronym_id is None:
        raise _not_found()
    try:
        await repository.delete(acronym_id)
    except NotFoundError as exc:
        raise _not_found() from exc
    logger.info("acronym_deleted id=%s", acronym_id)


async def search_acronyms(repository: AcronymRepository, term: str | None) -> list[Acronym]:
    if term is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'term' is required.",
        )
    # OR, not AND: a hit on either column is enough.
    return await repository.filter_or(
        [
            Predicate("short", term),
            Predicate("long", term),
        ]
    )


async def first_acronym(repository: AcronymRepository) -> Acronym:
    acronym = await repository.fetch_first()
    if acronym is None:
        raise _not_found("No acronyms yet.")
    return acronym


async def sorted_acronyms(repository: AcronymRepository) -> list[Acronym]:
    return await repository.sort_by("short", SortDirection.ASCENDING)


async def acronym_user(repository: AcronymRepository, raw_id: str) -> User:
    acronym = await resolve_acronym(repository, raw_id)
    user = await repository.fetch_related_user(acronym)
    if user is None:
        raise _not_found("User not found.")
    return user
