"""User Schemas — registration, profile update and public profile.

Invariants:
    - password is write-only: accepted on create/update, never present in UserRead
    - email must be a valid address; password at least 3 chars
    - UserUpdate: email/password cannot be explicitly nulled, names can
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from task_manager.core.domain_types import PASSWORD_MIN_LENGTH
from task_manager.schemas.partial import NonNullable, PatchModel


class UserCreate(BaseModel):
    """Self-registration payload."""
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=72)
    first_name: str | None = Field(None, alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)


class UserUpdate(PatchModel):
    """Partial profile update."""
    email: Annotated[EmailStr | None, NonNullable] = None
    password: Annotated[
        str | None,
        Field(min_length=PASSWORD_MIN_LENGTH, max_length=72),
        NonNullable,
    ] = None
    first_name: str | None = Field(None, alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)


class UserRead(BaseModel):
    """Public user representation."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    email: str
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    created_at: datetime = Field(alias="createdAt")
