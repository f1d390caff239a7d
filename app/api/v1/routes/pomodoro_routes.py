"""
Pomodoro Routes
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.pomodoro_controller import PomodoroController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.pomodoro_schemas import PomodoroCreate

router = APIRouter(prefix="/pomodoro", tags=["Pomodoro"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Pomodoro Session")
async def create_session(
    payload: PomodoroCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await PomodoroController.create_session(db, user_id, payload)


@router.get("", summary="List Pomodoro Sessions")
async def list_sessions(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    task_id: Optional[str] = Query(None, alias="taskId"),
    completed: Optional[bool] = None,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await PomodoroController.list_sessions(
        db, user_id,
        workspace_id=workspace_id,
        task_id=task_id,
        completed=completed,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/stats", summary="Pomodoro Stats")
async def get_stats(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await PomodoroController.get_stats(db, user_id, workspace_id, start_date, end_date)


@router.patch("/{session_id}/start", summary="Start Session")
async def start_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await PomodoroController.start_session(db, user_id, session_id)


@router.patch("/{session_id}/complete", summary="Complete Session")
async def complete_session(
    session_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await PomodoroController.complete_session(db, user_id, session_id)
