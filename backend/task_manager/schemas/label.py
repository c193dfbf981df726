"""Label Schemas — create, partial update and read models.

Invariants:
    - name is 3-1000 chars after stripping, on both create and update
    - name cannot be explicitly nulled on update
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from task_manager.core.domain_types import LABEL_NAME_MIN_LENGTH, LABEL_NAME_MAX_LENGTH
from task_manager.schemas.partial import NonNullable, NotBlank, PatchModel

LabelName = Annotated[
    str,
    Field(min_length=LABEL_NAME_MIN_LENGTH, max_length=LABEL_NAME_MAX_LENGTH),
    NotBlank,
]


class LabelCreate(BaseModel):
    name: LabelName


class LabelUpdate(PatchModel):
    name: Annotated[LabelName | None, NonNullable] = None


class LabelRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    created_at: datetime = Field(alias="createdAt")
