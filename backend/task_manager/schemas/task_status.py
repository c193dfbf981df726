"""TaskStatus Schemas — create, partial update and read models.

Invariants:
    - name and slug are non-blank on create and cannot be nulled on update
    - slug uniqueness is enforced by TaskStatusService, not here
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from task_manager.schemas.partial import NonNullable, NotBlank, PatchModel

StatusText = Annotated[str, Field(max_length=255), NotBlank]


class TaskStatusCreate(BaseModel):
    name: StatusText
    slug: StatusText


class TaskStatusUpdate(PatchModel):
    name: Annotated[StatusText | None, NonNullable] = None
    slug: Annotated[StatusText | None, NonNullable] = None


class TaskStatusRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    slug: str
    created_at: datetime = Field(alias="createdAt")
