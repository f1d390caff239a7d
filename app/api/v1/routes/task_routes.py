"""
Task Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.task_controller import TaskController
from app.database.connection import get_db
from app.enums import TaskPriority
from app.middlewares.pro_feature import require_pro
from app.schemas.task_schemas import TaskCreate, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Task")
async def create_task(
    payload: TaskCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TaskController.create_task(db, user_id, payload)


@router.get("", summary="List Tasks", description="Top-level tasks unless parentTaskId is given.")
async def list_tasks(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    category: Optional[str] = None,
    completed: Optional[bool] = None,
    priority: Optional[TaskPriority] = None,
    parent_task_id: Optional[str] = Query(None, alias="parentTaskId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TaskController.list_tasks(
        db, user_id,
        workspace_id=workspace_id,
        category=category,
        completed=completed,
        priority=priority.value if priority else None,
        parent_task_id=parent_task_id,
    )


@router.get("/{task_id}", summary="Get Task")
async def get_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TaskController.get_task(db, user_id, task_id)


@router.put("/{task_id}", summary="Update Task")
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TaskController.update_task(db, user_id, task_id, payload)


@router.delete("/{task_id}", summary="Delete Task")
async def delete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TaskController.delete_task(db, user_id, task_id)


@router.patch("/{task_id}/toggle", summary="Toggle Task Completion")
async def toggle_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await TaskController.toggle_task(db, user_id, task_id)
