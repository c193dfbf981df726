"""Task Authorization — ownership checks that need a task lookup.

Invariants:
    - is_task_assignee() on a missing task raises ResourceNotFoundError (404),
      it never answers False for a task that does not exist
"""

from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core import authorization
from task_manager.services.task_service import TaskService


class TaskAuthorization:

    def __init__(self, db: AsyncSession):
        self.tasks = TaskService(db)

    async def is_task_assignee(self, principal_id: int, task_id: int) -> bool:
        task = await self.tasks.get_task(task_id)
        return authorization.is_task_assignee(principal_id, task.assignee_id)
