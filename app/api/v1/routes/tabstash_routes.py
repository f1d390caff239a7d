"""
Tab Stash Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.tabstash_controller import TabStashController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.tabstash_schemas import TabStashCreate, TabStashUpdate

router = APIRouter(prefix="/tabstash", tags=["Tab Stash"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Stash Tabs")
async def create_stash(
    payload: TabStashCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TabStashController.create_stash(db, user_id, payload)


@router.get("", summary="List Tab Stashes")
async def list_stashes(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TabStashController.list_stashes(db, user_id, workspace_id)


@router.get("/{stash_id}", summary="Get Tab Stash")
async def get_stash(
    stash_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TabStashController.get_stash(db, user_id, stash_id)


@router.put("/{stash_id}", summary="Update Tab Stash")
async def update_stash(
    stash_id: str,
    payload: TabStashUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TabStashController.update_stash(db, user_id, stash_id, payload)


@router.delete("/{stash_id}", summary="Delete Tab Stash")
async def delete_stash(
    stash_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TabStashController.delete_stash(db, user_id, stash_id)
