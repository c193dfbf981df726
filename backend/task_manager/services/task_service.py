"""Task Service — task CRUD, reference resolution and filtered listing.

Invariants:
    - status is resolved from its slug at write time; assignee and labels must exist
    - Any unresolved reference → ValidationFailedError (400) listing every problem,
      nothing is written
    - Partial update: absent fields untouched, explicit null clears nullable fields
    - list_tasks() returns exactly the tasks build_task_predicate() accepts, id ascending

Design Decisions:
    - Filters rendered as SQL WHERE clauses so the database does the narrowing; the
      pure predicate in core/task_filter.py stays the reference semantics
    - Status join is one-to-one and the label criterion is an EXISTS subquery, so the
      listing never needs DISTINCT
    - Title matching lowercases both sides; on SQLite this relies on the Unicode
      lower() registered per connection in infrastructure/database.py
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.errors import ResourceNotFoundError, ValidationFailedError
from task_manager.core.task_filter import TaskFilter
from task_manager.models.label import Label
from task_manager.models.task import Task, task_labels
from task_manager.models.task_status import TaskStatus
from task_manager.models.user import User
from task_manager.schemas.task import TaskCreate, TaskUpdate
from task_manager.services.label_service import LabelService
from task_manager.services.task_status_service import TaskStatusService

logger = logging.getLogger(__name__)


def apply_task_filter(stmt: Select, params: TaskFilter) -> Select:
    """Render TaskFilter criteria as WHERE clauses on a select(Task)."""
    if params.title_contains is not None:
        stmt = stmt.where(
            func.lower(Task.name).contains(
                params.title_contains.lower(), autoescape=True,
            ),
        )
    if params.assignee_id is not None:
        stmt = stmt.where(Task.assignee_id == params.assignee_id)
    if params.status_slug is not None:
        stmt = stmt.join(Task.task_status).where(
            TaskStatus.slug == params.status_slug,
        )
    if params.label_id is not None:
        stmt = stmt.where(
            select(task_labels.c.task_id)
            .where(
                task_labels.c.task_id == Task.id,
                task_labels.c.label_id == params.label_id,
            )
            .exists(),
        )
    return stmt


@dataclass
class _ResolvedReferences:
    """References looked up for a task write, plus what could not be found."""
    values: dict = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


class TaskService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.statuses = TaskStatusService(db)
        self.labels = LabelService(db)

    async def list_tasks(self, params: TaskFilter | None = None) -> list[Task]:
        stmt = select(Task).order_by(Task.id)
        if params is not None and not params.is_unconstrained:
            stmt = apply_task_filter(stmt, params)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_task(self, task_id: int) -> Task:
        task = await self.db.get(Task, task_id)
        if task is None:
            raise ResourceNotFoundError("Task", task_id)
        return task

    async def create_task(self, data: TaskCreate) -> Task:
        refs = await self._resolve(
            status=data.status,
            assignee_id=data.assignee_id,
            label_ids=data.label_ids,
            fields={"status", "assignee_id", "label_ids"},
        )
        task = Task(
            name=data.title,
            description=data.content,
            index=data.index,
            task_status=refs["status"],
            assignee=refs["assignee_id"],
            labels=refs["label_ids"],
        )
        self.db.add(task)
        await self.db.flush()
        logger.info(f"Task {task.id} created")
        return task

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        task = await self.get_task(task_id)
        changes = data.changes()
        refs = await self._resolve(
            status=changes.get("status"),
            assignee_id=changes.get("assignee_id"),
            label_ids=changes.get("label_ids"),
            fields=changes.keys() & {"status", "assignee_id", "label_ids"},
        )
        if "title" in changes:
            task.name = changes["title"]
        if "content" in changes:
            task.description = changes["content"]
        if "index" in changes:
            task.index = changes["index"]
        if "status" in refs:
            task.task_status = refs["status"]
        if "assignee_id" in refs:
            task.assignee = refs["assignee_id"]
        if "label_ids" in refs:
            task.labels = refs["label_ids"]
        await self.db.flush()
        return task

    async def delete_task(self, task_id: int) -> None:
        task = await self.get_task(task_id)
        await self.db.delete(task)
        await self.db.flush()
        logger.info(f"Task {task_id} deleted")

    async def _resolve(
        self, status, assignee_id, label_ids, fields,
    ) -> dict:
        """Load the referenced entities named in fields; raise 400 if any is missing."""
        resolved = _ResolvedReferences()
        if "status" in fields:
            await self._resolve_status(status, resolved)
        if "assignee_id" in fields:
            await self._resolve_assignee(assignee_id, resolved)
        if "label_ids" in fields:
            await self._resolve_labels(label_ids, resolved)
        if resolved.errors:
            raise ValidationFailedError(resolved.errors)
        return resolved.values

    async def _resolve_status(self, slug: str, resolved: _ResolvedReferences):
        status = await self.statuses.find_by_slug(slug)
        if status is None:
            resolved.errors.append(f"status: task status '{slug}' not found")
        resolved.values["status"] = status

    async def _resolve_assignee(
        self, assignee_id: int | None, resolved: _ResolvedReferences,
    ):
        if assignee_id is None:
            resolved.values["assignee_id"] = None
            return
        user = await self.db.get(User, assignee_id)
        if user is None:
            resolved.errors.append(f"assignee_id: user {assignee_id} not found")
        resolved.values["assignee_id"] = user

    async def _resolve_labels(
        self, label_ids: list[int] | None, resolved: _ResolvedReferences,
    ):
        wanted = sorted(set(label_ids or []))
        labels: list[Label] = await self.labels.find_by_ids(wanted)
        missing = sorted(set(wanted) - {label.id for label in labels})
        if missing:
            ids = ", ".join(str(label_id) for label_id in missing)
            resolved.errors.append(f"taskLabelIds: labels not found: {ids}")
        resolved.values["label_ids"] = labels
