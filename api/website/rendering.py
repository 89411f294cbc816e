"""
HTML rendering for the website.

Templates are rendered to a complete string before a response object exists,
so a failing template produces an error response instead of a truncated page.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2
from fastapi import Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from .contexts import ErrorContext

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    pass


class Renderer:
    def __init__(self, directory: str | Path) -> None:
        self._templates = Jinja2Templates(directory=str(directory))

    def render_to_string(self, name: str, context: BaseModel | dict[str, Any], **extra: Any) -> str:
        # dict(model) is shallow: nested models stay objects for the templates.
        data = dict(context)
        data.update(extra)
        try:
            return self._templates.get_template(name).render(data)
        except jinja2.TemplateError as exc:
            raise RenderError(f"Failed to render template {name!r}: {exc}") from exc

    def render(
        self,
        request: Request,
        name: str,
        context: BaseModel | dict[str, Any],
        *,
        status_code: int = 200,
    ) -> HTMLResponse:
        html = self.render_to_string(name, context, request=request)
        return HTMLResponse(html, status_code=status_code)


def get_renderer(request: Request) -> Renderer:
    return request.app.state.renderer


def _detail_text(detail: Any) -> str:
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        messages = [str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail]
        return "; ".join(messages)
    return str(detail or "")


def render_error_page(request: Request, status_code: int, detail: Any = None) -> Response:
    renderer: Renderer | None = getattr(request.app.state, "renderer", None)
    context = ErrorContext(
        title=f"Error {status_code}",
        status_code=status_code,
        detail=_detail_text(detail),
    )
    if renderer is not None:
        try:
            return renderer.render(request, "error.html", context, status_code=status_code)
        except RenderError:
            logger.exception("error_page_render_failed status_code=%s", status_code)
    return PlainTextResponse(f"{status_code} {context.detail}".strip(), status_code=status_code)
