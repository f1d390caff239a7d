"""
Sync Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.sync_controller import SyncController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.sync_schemas import SyncRequest

router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post("", summary="Push Synced Data", description="Last write wins; a stale version is bumped past the stored one.")
async def sync_data(
    payload: SyncRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await SyncController.sync_data(db, user_id, payload)


@router.get("", summary="Get All Synced Data")
async def get_all_data(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await SyncController.get_all_data(db, user_id, workspace_id)


@router.get("/{data_type}", summary="Get Synced Data")
async def get_data(
    data_type: str,
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await SyncController.get_data(db, user_id, data_type, workspace_id)


@router.delete("/{data_type}", summary="Delete Synced Data")
async def delete_data(
    data_type: str,
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await SyncController.delete_data(db, user_id, data_type, workspace_id)
