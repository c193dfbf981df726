"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Task is the only referencing entity; User, TaskStatus and Label are referenced

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from task_manager.models.user import User  # noqa: F401
from task_manager.models.task_status import TaskStatus  # noqa: F401
from task_manager.models.label import Label  # noqa: F401
from task_manager.models.task import Task, task_labels  # noqa: F401
