"""
Workspace Routes
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.workspace_controller import WorkspaceController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.workspace_schemas import WorkspaceCreate, WorkspaceUpdate

router = APIRouter(prefix="/workspaces", tags=["Workspaces"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Workspace")
async def create_workspace(
    payload: WorkspaceCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await WorkspaceController.create_workspace(db, user_id, payload)


@router.get("", summary="List Workspaces", description="Default workspace first, then oldest first.")
async def list_workspaces(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await WorkspaceController.list_workspaces(db, user_id)


@router.get("/{workspace_id}", summary="Get Workspace")
async def get_workspace(
    workspace_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await WorkspaceController.get_workspace(db, user_id, workspace_id)


@router.put("/{workspace_id}", summary="Update Workspace")
async def update_workspace(
    workspace_id: str,
    payload: WorkspaceUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await WorkspaceController.update_workspace(db, user_id, workspace_id, payload)


@router.delete("/{workspace_id}", summary="Delete Workspace")
async def delete_workspace(
    workspace_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await WorkspaceController.delete_workspace(db, user_id, workspace_id)
