from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from acronyms import router as acronyms_router
from core import log, settings
from core.db import Database
from core.errors import StoreError
from users import router as users_router
from website import router as website_router
from website.rendering import RenderError, Renderer, render_error_page

logger = logging.getLogger(__name__)


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/") or request.url.path == "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the DB pool once per process.
    database: Database = app.state.database
    await database.connect()
    await database.ensure_schema()
    try:
        yield
    finally:
        await database.close()


def create_app(
    *,
    database: Database | None = None,
    renderer: Renderer | None = None,
) -> FastAPI:
    app = FastAPI(title="acronyms", version="0.1.0", lifespan=lifespan)
    app.state.database = database or Database()
    app.state.renderer = renderer or Renderer(settings.templates_dir())

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(acronyms_router.router, tags=["acronyms"])
    app.include_router(users_router.router, tags=["users"])
    app.include_router(website_router.router)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if _is_api_request(request):
            return await http_exception_handler(request, exc)
        return render_error_page(request, exc.status_code, exc.detail)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.exception("store_error path=%s", request.url.path, exc_info=exc)
        if _is_api_request(request):
            return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
        return render_error_page(request, 500, "Internal Server Error")

    @app.exception_handler(RenderError)
    async def handle_render_error(request: Request, exc: RenderError):
        logger.exception("render_failed path=%s", request.url.path, exc_info=exc)
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/hello", response_class=PlainTextResponse)
    def hello() -> str:
        return "Hello, world!"

    return app


log.configure_logging()
app = create_app()
