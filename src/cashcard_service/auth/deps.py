"""
cashcard_service.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert HTTP Basic credentials into a typed `Principal`.
- Enforce role checks via reusable dependency factories.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.concurrency import run_in_threadpool
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from cashcard_service.auth.models import Principal
from cashcard_service.auth.passwords import PasswordEncoder
from cashcard_service.auth.users import UserDirectory
from cashcard_service.observability.logging import get_logger

log = get_logger(__name__)

_basic = HTTPBasic(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Basic"}


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=detail, headers=_CHALLENGE)


def user_directory_from_app(request: Request) -> UserDirectory:
    # Installed on app startup in `cashcard_service.api.app.create_app`.
    return request.app.state.user_directory  # type: ignore[attr-defined]


def password_encoder_from_app(request: Request) -> PasswordEncoder:
    return request.app.state.password_encoder  # type: ignore[attr-defined]


async def authenticate(
    creds: HTTPBasicCredentials | None, users: UserDirectory, encoder: PasswordEncoder
) -> Principal:
    if creds is None:
        raise _unauthorized("Not authenticated")

    user = users.load_user(creds.username)
    if user is None:
        await run_in_threadpool(encoder.burn, creds.password)
        log.info("auth_failed", username=creds.username, reason="unknown_user")
        raise _unauthorized("Invalid credentials")

    if not await run_in_threadpool(encoder.matches, creds.password, user.password_hash):
        log.info("auth_failed", username=creds.username, reason="bad_password")
        raise _unauthorized("Invalid credentials")

    structlog.contextvars.bind_contextvars(username=user.username)
    return Principal(username=user.username, roles=user.roles)


def check_roles(principal: Principal, required: frozenset[str]) -> Principal:
    if not all(principal.has_role(role) for role in required):
        log.info("auth_forbidden", required=sorted(required))
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient role")
    return principal


async def get_principal(
    creds: HTTPBasicCredentials | None = Depends(_basic),
    users: UserDirectory = Depends(user_directory_from_app),
    encoder: PasswordEncoder = Depends(password_encoder_from_app),
) -> Principal:
    return await authenticate(creds, users, encoder)


def require_roles(*required: str):
    required_set = frozenset(required)

    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        return check_roles(principal, required_set)

    return _dep


async def authorize_request(request: Request, *required: str) -> Principal:
    """
    Same checks as `require_roles`, outside dependency injection. Used where FastAPI
    rejects a request (e.g. an undecodable JSON body) before route dependencies run.
    """
    creds = await _basic(request)
    principal = await authenticate(
        creds, user_directory_from_app(request), password_encoder_from_app(request)
    )
    return check_roles(principal, frozenset(required))


# --- Module Notes -----------------------------------------------------------
# Both failure paths return the same 401 detail so callers cannot tell an unknown
# username from a wrong password. The reason is only visible in the server logs.
