"""User Service — account CRUD and the credential store used by authentication.

Invariants:
    - Emails are stored stripped and lower-cased; lookups normalize the same way
    - Passwords are hashed before persisting; plaintext never reaches the ORM
    - Duplicate email → DuplicateResourceError (409), pre-checked and constraint-backed
    - Deleting a user who is assigned to any task → ResourceInUseError (409)

Design Decisions:
    - Implements core.repository_protocols.CredentialStore (get_by_email, save) so
      AuthService and the authentication gate depend on the protocol, not on this class
    - Ownership (self-only update/delete) is checked by the route via core.authorization
      before calling in; the service itself is principal-agnostic
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.errors import DuplicateResourceError, ResourceNotFoundError, ResourceInUseError
from task_manager.core.repository_protocols import PasswordHasher
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.schemas.user import UserCreate, UserUpdate
from task_manager.services.integrity import flush_unique, is_referenced

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """User persistence and profile operations."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get_user(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    async def save(self, user: User) -> User:
        self.db.add(user)
        await flush_unique(self.db, "User", "email", user.email)
        return user

    async def create_user(self, data: UserCreate) -> User:
        email = normalize_email(data.email)
        await self._ensure_email_free(email)
        user = User(
            email=email,
            password_hash=self.hasher.hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
        )
        await self.save(user)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        changes = data.changes()
        if "email" in changes:
            email = normalize_email(changes.pop("email"))
            if email != user.email:
                await self._ensure_email_free(email)
                user.email = email
        if "password" in changes:
            user.password_hash = self.hasher.hash(changes.pop("password"))
        for field, value in changes.items():
            setattr(user, field, value)
        return await self.save(user)

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        if await is_referenced(self.db, Task.assignee_id == user_id):
            raise ResourceInUseError("User", user_id)
        await self.db.delete(user)
        await self.db.flush()
        logger.info("User deleted", extra={"user_id": user_id})

    async def _ensure_email_free(self, email: str) -> None:
        if await self.get_by_email(email) is not None:
            raise DuplicateResourceError("User", "email", email)
