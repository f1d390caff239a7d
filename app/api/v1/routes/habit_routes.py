"""
Habit Routes
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.habit_controller import HabitController
from app.database.connection import get_db
from app.middlewares.pro_feature import require_pro
from app.schemas.habit_schemas import HabitCreate, HabitUpdate, HabitCheckIn

router = APIRouter(prefix="/habits", tags=["Habits"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Habit")
async def create_habit(
    payload: HabitCreate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.create_habit(db, user_id, payload)


@router.get("", summary="List Habits")
async def list_habits(
    workspace_id: Optional[str] = Query(None, alias="workspaceId"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.list_habits(db, user_id, workspace_id)


@router.get("/{habit_id}", summary="Get Habit With Entries")
async def get_habit(
    habit_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.get_habit(db, user_id, habit_id)


@router.put("/{habit_id}", summary="Update Habit")
async def update_habit(
    habit_id: str,
    payload: HabitUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.update_habit(db, user_id, habit_id, payload)


@router.delete("/{habit_id}", summary="Delete Habit")
async def delete_habit(
    habit_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.delete_habit(db, user_id, habit_id)


@router.post("/{habit_id}/checkin", summary="Check In")
async def check_in(
    habit_id: str,
    payload: Optional[HabitCheckIn] = None,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.check_in(db, user_id, habit_id, payload or HabitCheckIn())


@router.get("/{habit_id}/entries", summary="List Habit Entries")
async def list_entries(
    habit_id: str,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.list_entries(db, user_id, habit_id, start_date, end_date)


@router.get("/{habit_id}/streak", summary="Current Streak")
async def get_streak(
    habit_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(require_pro)
):
    return await HabitController.get_streak(db, user_id, habit_id)
