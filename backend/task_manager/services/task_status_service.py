"""TaskStatus Service — workflow state CRUD with slug uniqueness and delete guard.

Invariants:
    - slug is unique across statuses (409 on collision)
    - A status referenced by any task cannot be deleted (409)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.errors import DuplicateResourceError, ResourceNotFoundError, ResourceInUseError
from task_manager.models.task import Task
from task_manager.models.task_status import TaskStatus
from task_manager.schemas.task_status import TaskStatusCreate, TaskStatusUpdate
from task_manager.services.integrity import flush_unique, is_referenced

logger = logging.getLogger(__name__)


class TaskStatusService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_statuses(self) -> list[TaskStatus]:
        result = await self.db.execute(select(TaskStatus).order_by(TaskStatus.id))
        return list(result.scalars().all())

    async def get_status(self, status_id: int) -> TaskStatus:
        status = await self.db.get(TaskStatus, status_id)
        if status is None:
            raise ResourceNotFoundError("TaskStatus", status_id)
        return status

    async def find_by_slug(self, slug: str) -> TaskStatus | None:
        result = await self.db.execute(
            select(TaskStatus).where(TaskStatus.slug == slug),
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> TaskStatus:
        status = await self.find_by_slug(slug)
        if status is None:
            raise ResourceNotFoundError("TaskStatus", slug, field="slug")
        return status

    async def create_status(self, data: TaskStatusCreate) -> TaskStatus:
        await self._ensure_slug_free(data.slug)
        status = TaskStatus(name=data.name, slug=data.slug)
        self.db.add(status)
        await flush_unique(self.db, "TaskStatus", "slug", data.slug)
        return status

    async def update_status(
        self, status_id: int, data: TaskStatusUpdate,
    ) -> TaskStatus:
        status = await self.get_status(status_id)
        changes = data.changes()
        if "slug" in changes and changes["slug"] != status.slug:
            await self._ensure_slug_free(changes["slug"])
        for field, value in changes.items():
            setattr(status, field, value)
        await flush_unique(self.db, "TaskStatus", "slug", status.slug)
        return status

    async def delete_status(self, status_id: int) -> None:
        status = await self.get_status(status_id)
        if await is_referenced(self.db, Task.task_status_id == status_id):
            raise ResourceInUseError("TaskStatus", status_id)
        await self.db.delete(status)
        await self.db.flush()
        logger.info(f"TaskStatus {status_id} deleted")

    async def _ensure_slug_free(self, slug: str) -> None:
        if await self.find_by_slug(slug) is not None:
            raise DuplicateResourceError("TaskStatus", "slug", slug)
