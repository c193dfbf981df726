"""User Routes — registration is open, profile changes are self-only.

Invariants:
    - GET and POST need no token
    - PUT/DELETE require a principal, and the principal must be the target user (403)
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.api.authentication import get_password_hasher, require_principal
from task_manager.api.listing import with_total_count
from task_manager.core.authorization import ensure_self
from task_manager.core.domain_types import Principal
from task_manager.core.repository_protocols import PasswordHasher
from task_manager.infrastructure.database import get_db
from task_manager.schemas.user import UserCreate, UserRead, UserUpdate
from task_manager.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(db, hasher)


@router.get("", response_model=list[UserRead])
async def list_users(
    response: Response, service: UserService = Depends(get_user_service),
):
    return with_total_count(response, await service.list_users())


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int, service: UserService = Depends(get_user_service),
):
    return await service.get_user(user_id)


@router.post(
    "", response_model=UserRead, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    user = await service.create_user(body)
    await db.commit()
    return user


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    body: UserUpdate,
    principal: Principal = Depends(require_principal),
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    """Update own profile. Changing the email invalidates outstanding tokens."""
    ensure_self(principal, user_id)
    user = await service.update_user(user_id, body)
    await db.commit()
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    principal: Principal = Depends(require_principal),
    db: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    ensure_self(principal, user_id)
    await service.delete_user(user_id)
    await db.commit()
