"""Label Routes — every endpoint requires a principal."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.api.authentication import require_principal
from task_manager.api.listing import with_total_count
from task_manager.infrastructure.database import get_db
from task_manager.schemas.label import LabelCreate, LabelRead, LabelUpdate
from task_manager.services.label_service import LabelService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/labels",
    tags=["labels"],
    dependencies=[Depends(require_principal)],
)


def get_label_service(db: AsyncSession = Depends(get_db)) -> LabelService:
    return LabelService(db)


@router.get("", response_model=list[LabelRead])
async def list_labels(
    response: Response, service: LabelService = Depends(get_label_service),
):
    return with_total_count(response, await service.list_labels())


@router.get("/{label_id}", response_model=LabelRead)
async def get_label(
    label_id: int, service: LabelService = Depends(get_label_service),
):
    return await service.get_label(label_id)


@router.post(
    "", response_model=LabelRead, status_code=status.HTTP_201_CREATED,
)
async def create_label(
    body: LabelCreate,
    db: AsyncSession = Depends(get_db),
    service: LabelService = Depends(get_label_service),
):
    label = await service.create_label(body)
    await db.commit()
    return label


@router.put("/{label_id}", response_model=LabelRead)
async def update_label(
    label_id: int,
    body: LabelUpdate,
    db: AsyncSession = Depends(get_db),
    service: LabelService = Depends(get_label_service),
):
    label = await service.update_label(label_id, body)
    await db.commit()
    return label


@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_label(
    label_id: int,
    db: AsyncSession = Depends(get_db),
    service: LabelService = Depends(get_label_service),
):
    """409 while any task carries the label."""
    await service.delete_label(label_id)
    await db.commit()
