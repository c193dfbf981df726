"""User ORM — persists accounts and their password hashes.

Invariants:
    - email is unique, non-nullable, stored lower-cased (normalized by UserService)
    - password_hash is never serialized outward (schemas omit it)
    - created_at is set on insert and never updated

Design Decisions:
    - Unique constraint on email is the authoritative uniqueness guard; the service-level
      pre-check only provides the friendly error path
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.db.base import Base


class User(Base):
    """Account entity — the token subject resolves to one of these."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
