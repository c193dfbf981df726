"""Login Route — POST /api/login returns a bearer token as plain text."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.api.authentication import get_password_hasher, get_token_service
from task_manager.core.repository_protocols import PasswordHasher
from task_manager.core.tokens import TokenService
from task_manager.infrastructure.database import get_db
from task_manager.schemas.auth import LoginRequest
from task_manager.services.auth_service import AuthService
from task_manager.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_class=PlainTextResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
):
    """Exchange email + password for a token. 401 on bad credentials."""
    service = AuthService(UserService(db, hasher), hasher, token_service)
    token = await service.login(body.username, body.password)
    return PlainTextResponse(token)
