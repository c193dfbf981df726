"""Startup Seeding — default statuses, labels and the bootstrap admin account.

Invariants:
    - Idempotent: existing rows (matched by slug, name or email) are left alone
    - The admin account is only created when a password is configured
    - Goes through the entity services so seeded rows obey the same rules as API writes
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.domain_types import DEFAULT_LABEL_NAMES, DEFAULT_TASK_STATUS_SLUGS
from task_manager.core.repository_protocols import PasswordHasher
from task_manager.schemas.label import LabelCreate
from task_manager.schemas.task_status import TaskStatusCreate
from task_manager.schemas.user import UserCreate
from task_manager.services.label_service import LabelService
from task_manager.services.task_status_service import TaskStatusService
from task_manager.services.user_service import UserService

logger = logging.getLogger(__name__)

ADMIN_FIRST_NAME = "Admin"
ADMIN_LAST_NAME = "User"


async def seed_defaults(
    db: AsyncSession,
    hasher: PasswordHasher,
    admin_email: str | None = None,
    admin_password: str | None = None,
) -> None:
    """Insert missing default rows and flush; the caller commits."""
    statuses = TaskStatusService(db)
    for slug in DEFAULT_TASK_STATUS_SLUGS:
        if await statuses.find_by_slug(slug) is None:
            await statuses.create_status(TaskStatusCreate(name=slug, slug=slug))
            logger.info(f"Seeded task status '{slug}'")

    labels = LabelService(db)
    for name in DEFAULT_LABEL_NAMES:
        if await labels.find_by_name(name) is None:
            await labels.create_label(LabelCreate(name=name))
            logger.info(f"Seeded label '{name}'")

    if not admin_email:
        return
    if not admin_password:
        logger.warning("ADMIN_PASSWORD not set; bootstrap account not seeded")
        return
    users = UserService(db, hasher)
    if await users.get_by_email(admin_email) is None:
        await users.create_user(UserCreate(
            email=admin_email,
            password=admin_password,
            first_name=ADMIN_FIRST_NAME,
            last_name=ADMIN_LAST_NAME,
        ))
        logger.info("Seeded admin account", extra={"subject": admin_email})
