"""TaskStatus Routes — reads are public, writes need a principal."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.api.authentication import require_principal
from task_manager.api.listing import with_total_count
from task_manager.infrastructure.database import get_db
from task_manager.schemas.task_status import (
    TaskStatusCreate, TaskStatusRead, TaskStatusUpdate,
)
from task_manager.services.task_status_service import TaskStatusService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/task_statuses", tags=["task_statuses"])


def get_task_status_service(
    db: AsyncSession = Depends(get_db),
) -> TaskStatusService:
    return TaskStatusService(db)


@router.get("", response_model=list[TaskStatusRead])
async def list_task_statuses(
    response: Response,
    service: TaskStatusService = Depends(get_task_status_service),
):
    return with_total_count(response, await service.list_statuses())


@router.get("/slug/{slug}", response_model=TaskStatusRead)
async def get_task_status_by_slug(
    slug: str, service: TaskStatusService = Depends(get_task_status_service),
):
    return await service.get_by_slug(slug)


@router.get("/{status_id}", response_model=TaskStatusRead)
async def get_task_status(
    status_id: int,
    service: TaskStatusService = Depends(get_task_status_service),
):
    return await service.get_status(status_id)


@router.post(
    "",
    response_model=TaskStatusRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_principal)],
)
async def create_task_status(
    body: TaskStatusCreate,
    db: AsyncSession = Depends(get_db),
    service: TaskStatusService = Depends(get_task_status_service),
):
    task_status = await service.create_status(body)
    await db.commit()
    return task_status


@router.put(
    "/{status_id}",
    response_model=TaskStatusRead,
    dependencies=[Depends(require_principal)],
)
async def update_task_status(
    status_id: int,
    body: TaskStatusUpdate,
    db: AsyncSession = Depends(get_db),
    service: TaskStatusService = Depends(get_task_status_service),
):
    task_status = await service.update_status(status_id, body)
    await db.commit()
    return task_status


@router.delete(
    "/{status_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_principal)],
)
async def delete_task_status(
    status_id: int,
    db: AsyncSession = Depends(get_db),
    service: TaskStatusService = Depends(get_task_status_service),
):
    """409 while any task is in this status."""
    await service.delete_status(status_id)
    await db.commit()
