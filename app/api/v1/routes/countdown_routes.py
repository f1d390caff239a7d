"""
Countdown Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.countdown_controller import CountdownController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.countdown_schemas import CountdownCreate, CountdownUpdate

router = APIRouter(prefix="/countdowns", tags=["Countdowns"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Countdown")
async def create_countdown(
    payload: CountdownCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await CountdownController.create_countdown(db, user_id, payload)


@router.get("", summary="List Countdowns")
async def list_countdowns(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await CountdownController.list_countdowns(db, user_id, workspace_id)


@router.get("/{countdown_id}", summary="Get Countdown")
async def get_countdown(
    countdown_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await CountdownController.get_countdown(db, user_id, countdown_id)


@router.put("/{countdown_id}", summary="Update Countdown")
async def update_countdown(
    countdown_id: str,
    payload: CountdownUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await CountdownController.update_countdown(db, user_id, countdown_id, payload)


@router.delete("/{countdown_id}", summary="Delete Countdown")
async def delete_countdown(
    countdown_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await CountdownController.delete_countdown(db, user_id, countdown_id)
