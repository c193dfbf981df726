"""Task Schemas — external task representation and its write payloads.

The wire format renames ORM columns:
    title        ↔ Task.name
    content      ↔ Task.description
    status       ↔ Task.task_status.slug
    taskLabelIds ↔ sorted ids of Task.labels

Invariants:
    - title and status are required on create and cannot be nulled on update
    - content, index, assignee_id and taskLabelIds may be explicitly nulled to clear them
    - Reference existence (status slug, assignee, labels) is checked by TaskService
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from task_manager.models.task import Task
from task_manager.schemas.partial import NonNullable, NotBlank, PatchModel

Title = Annotated[str, Field(max_length=255), NotBlank]
StatusSlug = Annotated[str, Field(max_length=255), NotBlank]


class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Title
    status: StatusSlug
    index: int | None = None
    content: str | None = None
    assignee_id: int | None = None
    label_ids: list[int] | None = Field(None, alias="taskLabelIds")


class TaskUpdate(PatchModel):
    title: Annotated[Title | None, NonNullable] = None
    status: Annotated[StatusSlug | None, NonNullable] = None
    index: int | None = None
    content: str | None = None
    assignee_id: int | None = None
    label_ids: list[int] | None = Field(None, alias="taskLabelIds")


class TaskRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    index: int | None = None
    title: str
    content: str | None = None
    status: str
    assignee_id: int | None = None
    label_ids: list[int] = Field(default_factory=list, alias="taskLabelIds")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_model(cls, task: Task) -> "TaskRead":
        return cls(
            id=task.id,
            index=task.index,
            title=task.name,
            content=task.description,
            status=task.status_slug,
            assignee_id=task.assignee_id,
            label_ids=sorted(task.label_ids),
            created_at=task.created_at,
        )
