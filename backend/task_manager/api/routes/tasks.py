"""Task Routes — filtered listing and CRUD, every endpoint requires a principal.

Query parameters for GET /api/tasks (all optional, combined with AND):
    titleCont   case-insensitive substring of the title
    assigneeId  exact assignee id
    status      exact status slug
    labelId     task carries this label
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.api.authentication import require_principal
from task_manager.api.listing import with_total_count
from task_manager.core.task_filter import TaskFilter
from task_manager.infrastructure.database import get_db
from task_manager.schemas.task import TaskCreate, TaskRead, TaskUpdate
from task_manager.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(require_principal)],
)


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


def get_task_filter(
    title_cont: str | None = Query(None, alias="titleCont"),
    assignee_id: int | None = Query(None, alias="assigneeId"),
    status_slug: str | None = Query(None, alias="status"),
    label_id: int | None = Query(None, alias="labelId"),
) -> TaskFilter:
    return TaskFilter(
        title_contains=title_cont,
        assignee_id=assignee_id,
        status_slug=status_slug,
        label_id=label_id,
    )


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    response: Response,
    params: TaskFilter = Depends(get_task_filter),
    service: TaskService = Depends(get_task_service),
):
    tasks = await service.list_tasks(params)
    return with_total_count(response, [TaskRead.from_model(t) for t in tasks])


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int, service: TaskService = Depends(get_task_service),
):
    return TaskRead.from_model(await service.get_task(task_id))


@router.post(
    "", response_model=TaskRead, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    db: AsyncSession = Depends(get_db),
    service: TaskService = Depends(get_task_service),
):
    task = await service.create_task(body)
    await db.commit()
    return TaskRead.from_model(task)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    service: TaskService = Depends(get_task_service),
):
    task = await service.update_task(task_id, body)
    await db.commit()
    return TaskRead.from_model(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    service: TaskService = Depends(get_task_service),
):
    await service.delete_task(task_id)
    await db.commit()
