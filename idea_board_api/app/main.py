"""
Main entrypoint for the Idea Board API.

This module assembles the FastAPI application: it sets up logging,
creates (or accepts) the idea store, registers error handlers that
render every failure as ``{"error": "..."}``, enables CORS for browser
clients and mounts the routes under ``/api``.  The ``create_app``
function builds the app, which is then instantiated at module import
time as ``app`` so it can be served with, e.g.::

    uvicorn idea_board_api.app.main:app --port 3001
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.exceptions import StoreError
from .core.logging_config import setup_logging
from .services.idea_store import IdeaStore, build_store

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request body for %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(store: Optional[IdeaStore] = None, config: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[IdeaStore]
        Store backing the endpoints.  When omitted, one is built from
        ``config.idea_store``.
    config : Optional[Settings]
        Settings to use instead of the module‑level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or settings
    setup_logging(config)

    store = store if store is not None else build_store(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # A database that is down at startup should not keep the API from
        # serving /health; requests touching the store will answer 500.
        try:
            app.state.store.init()
            logger.info("Idea store %s initialised", type(app.state.store).__name__)
        except StoreError:
            logger.error("Idea store initialisation failed; continuing without schema setup")
        if not app.state.store.ping():
            logger.warning("Idea store is not reachable; idea requests will fail until it is")
        yield

    app = FastAPI(title=config.project_name, version=config.api_version, lifespan=lifespan)
    app.state.store = store

    origins = config.cors_origin_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(api_router, prefix="/api")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
