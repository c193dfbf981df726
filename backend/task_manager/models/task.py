"""Task ORM — the referencing entity tying statuses, assignees and labels together.

Invariants:
    - task_status_id is non-nullable (every task has a status)
    - assignee_id is nullable (unassigned tasks are allowed)
    - Labels via task_labels association; no cascade to statuses, users or labels
    - Foreign keys are RESTRICT: referenced rows are never cascaded away

Design Decisions:
    - selectin loading for status/assignee/labels: async sessions cannot lazy-load on
      attribute access, and every read path serializes all three
    - status_slug / label_ids properties expose the shape core/task_filter.py expects,
      so the reference predicate runs directly against ORM rows
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column, DateTime, ForeignKey, Integer, String, Table, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from task_manager.db.base import Base


task_labels = Table(
    "task_labels",
    Base.metadata,
    Column(
        "task_id", Integer,
        ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "label_id", Integer,
        ForeignKey("labels.id", ondelete="RESTRICT"), primary_key=True,
    ),
)


class Task(Base):
    """Task entity."""
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    task_status_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("task_statuses.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    assignee_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    task_status: Mapped["TaskStatus"] = relationship(
        "TaskStatus", lazy="selectin",
    )
    assignee: Mapped[Optional["User"]] = relationship(
        "User", lazy="selectin",
    )
    labels: Mapped[list["Label"]] = relationship(
        "Label", secondary=task_labels, lazy="selectin",
        order_by="Label.id",
    )

    @property
    def status_slug(self) -> str:
        return self.task_status.slug

    @property
    def label_ids(self) -> set[int]:
        return {label.id for label in self.labels}
