"""Partial Update Helpers — three-state fields for update DTOs.

Invariants:
    - Absent field → not in changes() → value left untouched
    - Explicit null on a nullable field → in changes() as None → value cleared
    - Explicit null on a required field → 400 (NonNullable validator)

Design Decisions:
    - model_fields_set instead of a wrapper type: Pydantic already records which
      fields the client sent, so "absent" never collapses into "null"
    - AfterValidator only runs on supplied values (defaults are not validated),
      so NonNullable rejects explicit nulls without rejecting omissions
    - NotBlank strips before the core str validation so length limits see the
      stripped value
"""

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict


def _reject_null(value):
    if value is None:
        raise ValueError("must not be null")
    return value


def _strip_not_blank(value):
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


NonNullable = AfterValidator(_reject_null)
NotBlank = BeforeValidator(_strip_not_blank)


class PatchModel(BaseModel):
    """Base for update DTOs."""

    model_config = ConfigDict(populate_by_name=True)

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)
