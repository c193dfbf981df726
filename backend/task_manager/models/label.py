"""Label ORM — free-form tags attached to tasks.

Invariants:
    - name is unique, 3-1000 chars (length enforced by schemas)
    - Deletion blocked while any task carries the label (LabelService)
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.db.base import Base
from task_manager.core.domain_types import LABEL_NAME_MAX_LENGTH


class Label(Base):
    """Label entity — many-to-many with Task through task_labels."""
    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(LABEL_NAME_MAX_LENGTH), nullable=False, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
