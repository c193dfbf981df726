"""Integrity Guards — shared uniqueness and reference checks for entity services.

Invariants:
    - is_referenced() answers "does any row satisfy this condition" with one EXISTS query
    - flush_unique() turns a storage-level unique violation into DuplicateResourceError

Design Decisions:
    - Check-then-act: a concurrent writer can slip between the pre-check and the flush.
      The unique constraints stay authoritative, flush_unique() reports their verdict
      with the same 409 shape as the pre-check
"""

import logging

from sqlalchemy import ColumnElement, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.errors import DuplicateResourceError

logger = logging.getLogger(__name__)


async def is_referenced(db: AsyncSession, condition: ColumnElement[bool]) -> bool:
    return bool(await db.scalar(select(exists().where(condition))))


async def flush_unique(
    db: AsyncSession, resource_type: str, field: str, value: str,
) -> None:
    """Flush pending writes, reporting a unique violation as a duplicate."""
    try:
        await db.flush()
    except IntegrityError as e:
        logger.warning(
            f"Unique constraint rejected {resource_type}.{field}: {e.orig}",
            extra={"error_code": "DUPLICATE_RESOURCE"},
        )
        raise DuplicateResourceError(resource_type, field, value) from e
