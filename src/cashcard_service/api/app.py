"""
cashcard_service.api.app

FastAPI app factory for the Cash Card service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Install the user directory and password encoder used by HTTP Basic auth.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Map store failures onto a generic 500 and keep 422 bodies JSON-serializable.
"""

from __future__ import annotations

import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from cashcard_service import __version__
from cashcard_service.api.routers.cash_cards import router as cash_cards_router
from cashcard_service.api.routers.health import router as health_router
from cashcard_service.auth.deps import authorize_request
from cashcard_service.auth.models import CARD_OWNER
from cashcard_service.auth.passwords import PasswordEncoder
from cashcard_service.auth.users import InMemoryUserDirectory, UserDirectory, fixed_test_users
from cashcard_service.db.init_db import init_db
from cashcard_service.db.session import create_engine, create_sessionmaker
from cashcard_service.observability.logging import configure_logging, get_logger
from cashcard_service.observability.middleware import RequestContextMiddleware
from cashcard_service.settings import Settings

log = get_logger(__name__)


def _json_safe(value: Any) -> Any:
    # Validation errors echo the rejected input back, which may be NaN or Infinity.
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def _is_card_path(path: str) -> bool:
    prefix = cash_cards_router.prefix
    return path == prefix or path.startswith(prefix + "/")


def create_app(
    *,
    settings: Settings,
    user_directory: UserDirectory | None = None,
    password_encoder: PasswordEncoder | None = None,
) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    encoder = password_encoder or PasswordEncoder.from_settings(settings)
    if user_directory is None:
        if settings.seed_test_users:
            user_directory = fixed_test_users(encoder)
        else:
            log.warning("no_user_directory", detail="every /cashcard request will be rejected")
            user_directory = InMemoryUserDirectory()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schemas come from `alembic upgrade head`.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Cash Card Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_directory = user_directory
    app.state.password_encoder = encoder

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(cash_cards_router)

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        log.error("store_error", exc_info=exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> Response:
        # A malformed body fails before route dependencies run; callers without
        # access still get 401/403 rather than a description of their payload.
        if _is_card_path(request.url.path):
            try:
                await authorize_request(request, CARD_OWNER)
            except HTTPException as auth_exc:
                return await http_exception_handler(request, auth_exc)
        return JSONResponse(
            status_code=422,
            content={"detail": _json_safe(jsonable_encoder(exc.errors()))},
        )

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request handling lives in routers and data access in
# `db.repositories`.
