"""TaskStatus ORM — workflow states a task can be in.

Invariants:
    - slug is unique and is the external identifier used by tasks
    - Deletion blocked while any task references the status (TaskStatusService)
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.db.base import Base


class TaskStatus(Base):
    """Task status entity — referenced by slug in the task representation."""
    __tablename__ = "task_statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
