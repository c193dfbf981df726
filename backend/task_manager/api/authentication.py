"""Authentication Gate — establishes the request principal from a bearer token.

Invariants:
    - authenticate_request runs once per request as an app-level dependency
    - The gate NEVER raises: every failure degrades to "no principal"
    - Exempt paths (login, frontend assets, welcome, health) skip token processing
    - An already established principal is never overwritten
    - require_principal is the single place that turns "no principal" into 401

Design Decisions:
    - FastAPI dependency over Starlette middleware: dependencies share the request's
      DB session and can be overridden in tests like any other dependency
    - The failure reason is kept on request.state.auth_failure for logs only; the
      401 body uses a generic message so token internals never reach clients
"""

import logging
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.config import get_settings
from task_manager.core.bearer_token import extract_bearer_token, is_exempt
from task_manager.core.domain_types import Principal, UserId
from task_manager.core.errors import UnauthenticatedError
from task_manager.core.repository_protocols import PasswordHasher
from task_manager.core.tokens import TokenError, TokenService, subject_of
from task_manager.infrastructure.database import get_db
from task_manager.infrastructure.passwords import BcryptPasswordHasher
from task_manager.services.user_service import UserService

logger = logging.getLogger(__name__)


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        settings.jwt_secret,
        settings.jwt_expiration_seconds,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().password_hash_rounds)


async def authenticate_request(
    request: Request,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> None:
    """Attach request.state.principal when a valid bearer token is present."""
    request.state.auth_failure = None
    if is_exempt(request.url.path):
        return
    if getattr(request.state, "principal", None) is not None:
        return
    request.state.principal = None

    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return

    try:
        claims = token_service.verify(token)
    except TokenError as e:
        request.state.auth_failure = e.kind
        logger.warning(
            f"Bearer token rejected: {e.message}",
            extra={"token_error": e.kind.value, "path": request.url.path},
        )
        return

    subject = subject_of(claims)
    user = await UserService(db, hasher).get_by_email(subject)
    if user is None:
        request.state.auth_failure = "unknown_subject"
        logger.warning(
            "Token subject has no account",
            extra={"subject": subject, "path": request.url.path},
        )
        return
    request.state.principal = Principal(id=UserId(user.id), email=user.email)


def get_principal(request: Request) -> Principal | None:
    """The authenticated principal, or None for anonymous requests."""
    return getattr(request.state, "principal", None)


def require_principal(
    principal: Principal | None = Depends(get_principal),
) -> Principal:
    """Dependency for protected routes: 401 unless a principal is established."""
    if principal is None:
        raise UnauthenticatedError()
    return principal
