"""
Server-rendered website over the same acronym store.

Reads render a named template; successful writes answer with a 303 redirect
(`/acronyms/{id}` after create/edit, `/` after delete).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from acronyms import service as acronym_service
from acronyms.repository import AcronymRepository
from acronyms.schemas import Acronym
from core.dependencies import get_acronym_repository, get_user_repository
from users.repository import UserRepository

from .contexts import AcronymContext, CreateAcronymContext, EditAcronymContext, IndexContext
from .rendering import Renderer, get_renderer

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)


def _redirect_to_acronym(acronym: Acronym) -> RedirectResponse:
    if acronym.id is None:
        logger.error("acronym_saved_without_id short=%s", acronym.short)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Saved acronym has no id.",
        )
    return RedirectResponse(f"/acronyms/{acronym.id}", status_code=status.HTTP_303_SEE_OTHER)


async def _form_data(request: Request) -> dict:
    form = await request.form()
    return {key: form.get(key) for key in form.keys()}


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    acronyms = await acronym_service.list_acronyms(repository)
    context = IndexContext(acronyms=acronyms or None)
    return renderer.render(request, "index.html", context)


@router.get("/acronyms/create", response_class=HTMLResponse)
async def create_acronym_form(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    context = CreateAcronymContext(users=await users.fetch_all())
    return renderer.render(request, "createAcronym.html", context)


@router.post("/acronyms/create")
async def create_acronym(
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> RedirectResponse:
    payload = acronym_service.decode_payload(await _form_data(request))
    acronym = await acronym_service.create_acronym(repository, payload)
    return _redirect_to_acronym(acronym)


@router.get("/acronyms/{acronym_id}", response_class=HTMLResponse)
async def acronym_detail(
    acronym_id: str,
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    acronym = await acronym_service.resolve_acronym(repository, acronym_id)
    user = await repository.fetch_related_user(acronym)
    context = AcronymContext(title=acronym.short, acronym=acronym, user=user)
    return renderer.render(request, "acronym.html", context)


@router.get("/acronyms/{acronym_id}/edit", response_class=HTMLResponse)
async def edit_acronym_form(
    acronym_id: str,
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
    users: UserRepository = Depends(get_user_repository),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    acronym = await acronym_service.resolve_acronym(repository, acronym_id)
    context = EditAcronymContext(acronym=acronym, users=await users.fetch_all())
    return renderer.render(request, "createAcronym.html", context)


@router.post("/acronyms/{acronym_id}/edit")
async def edit_acronym(
    acronym_id: str,
    request: Request,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> RedirectResponse:
    form = await _form_data(request)
    acronym = await acronym_service.update_acronym(repository, acronym_id, form)
    return _redirect_to_acronym(acronym)


@router.post("/acronyms/{acronym_id}/delete")
async def delete_acronym(
    acronym_id: str,
    repository: AcronymRepository = Depends(get_acronym_repository),
) -> RedirectResponse:
    await acronym_service.delete_acronym(repository, acronym_id)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
