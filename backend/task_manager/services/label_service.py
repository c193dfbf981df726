"""Label Service — label CRUD with name uniqueness and delete guard.

Invariants:
    - name is unique across labels (409 on collision)
    - A label attached to any task cannot be deleted (409); detach it first
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.errors import DuplicateResourceError, ResourceNotFoundError, ResourceInUseError
from task_manager.models.label import Label
from task_manager.models.task import task_labels
from task_manager.schemas.label import LabelCreate, LabelUpdate
from task_manager.services.integrity import flush_unique, is_referenced

logger = logging.getLogger(__name__)


class LabelService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_labels(self) -> list[Label]:
        result = await self.db.execute(select(Label).order_by(Label.id))
        return list(result.scalars().all())

    async def get_label(self, label_id: int) -> Label:
        label = await self.db.get(Label, label_id)
        if label is None:
            raise ResourceNotFoundError("Label", label_id)
        return label

    async def find_by_name(self, name: str) -> Label | None:
        result = await self.db.execute(select(Label).where(Label.name == name))
        return result.scalar_one_or_none()

    async def find_by_ids(self, label_ids: list[int]) -> list[Label]:
        if not label_ids:
            return []
        result = await self.db.execute(
            select(Label).where(Label.id.in_(label_ids)).order_by(Label.id),
        )
        return list(result.scalars().all())

    async def create_label(self, data: LabelCreate) -> Label:
        await self._ensure_name_free(data.name)
        label = Label(name=data.name)
        self.db.add(label)
        await flush_unique(self.db, "Label", "name", data.name)
        return label

    async def update_label(self, label_id: int, data: LabelUpdate) -> Label:
        label = await self.get_label(label_id)
        changes = data.changes()
        if "name" in changes and changes["name"] != label.name:
            await self._ensure_name_free(changes["name"])
            label.name = changes["name"]
        await flush_unique(self.db, "Label", "name", label.name)
        return label

    async def delete_label(self, label_id: int) -> None:
        label = await self.get_label(label_id)
        if await is_referenced(self.db, task_labels.c.label_id == label_id):
            raise ResourceInUseError("Label", label_id)
        await self.db.delete(label)
        await self.db.flush()
        logger.info(f"Label {label_id} deleted")

    async def _ensure_name_free(self, name: str) -> None:
        if await self.find_by_name(name) is not None:
            raise DuplicateResourceError("Label", "name", name)
