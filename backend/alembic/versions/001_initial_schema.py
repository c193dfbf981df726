"""Initial schema — users, task_statuses, labels, tasks, task_labels.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "task_statuses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_task_statuses_slug", "task_statuses", ["slug"], unique=True)

    op.create_table(
        "labels",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(1000), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("index", sa.Integer, nullable=True),
        sa.Column(
            "task_status_id", sa.Integer,
            sa.ForeignKey("task_statuses.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column(
            "assignee_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="RESTRICT"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tasks_task_status_id", "tasks", ["task_status_id"])
    op.create_index("ix_tasks_assignee_id", "tasks", ["assignee_id"])

    op.create_table(
        "task_labels",
        sa.Column(
            "task_id", sa.Integer,
            sa.ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "label_id", sa.Integer,
            sa.ForeignKey("labels.id", ondelete="RESTRICT"), primary_key=True,
        ),
    )


def downgrade() -> None:
    op.drop_table("task_labels")
    op.drop_index("ix_tasks_assignee_id", table_name="tasks")
    op.drop_index("ix_tasks_task_status_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("labels")
    op.drop_index("ix_task_statuses_slug", table_name="task_statuses")
    op.drop_table("task_statuses")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
