"""
Habit Controller
"""
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy import desc, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_payload_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.habit import Habit, HabitEntry
from app.schemas.base_schemas import success_response
from app.schemas.habit_schemas import (
    HabitCreate, HabitUpdate, HabitCheckIn,
    HabitResponse, HabitDetailResponse, HabitEntryResponse
)

logger = get_logger("habit_controller")


def calculate_streak(completed_dates: List[date], today: date) -> int:
    """Consecutive days ending today that have a completed entry."""
    days = set(completed_dates)
    streak = 0
    while today - timedelta(days=streak) in days:
        streak += 1
    return streak


class HabitController:

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, habit_id: str) -> Habit:
        result = await db.execute(
            select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
        )
        habit = result.scalar_one_or_none()
        if habit is None:
            raise NotFoundError("Habit not found")
        return habit

    @staticmethod
    async def create_habit(db: AsyncSession, user_id: str, payload: HabitCreate) -> Dict:
        try:
            values = payload.model_dump()
            await check_payload_references(db, user_id, values)
            habit = Habit(user_id=user_id, **values)
            db.add(habit)
            await db.commit()
            await db.refresh(habit)
            return success_response(HabitResponse.model_validate(habit))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating habit: {e}")
            raise internal_error("Failed to create habit")

    @staticmethod
    async def list_habits(db: AsyncSession, user_id: str, workspace_id: Optional[str] = None) -> Dict:
        try:
            stmt = select(Habit).where(Habit.user_id == user_id)
            if workspace_id:
                stmt = stmt.where(Habit.workspace_id == workspace_id)
            result = await db.execute(stmt.order_by(desc(Habit.created_at)))
            return success_response([HabitResponse.model_validate(h) for h in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing habits: {e}")
            raise internal_error("Failed to get habits")

    @staticmethod
    async def get_habit(db: AsyncSession, user_id: str, habit_id: str) -> Dict:
        try:
            habit = await HabitController._get_owned(db, user_id, habit_id)
            entries = await db.execute(
                select(HabitEntry).where(HabitEntry.habit_id == habit.id).order_by(desc(HabitEntry.date))
            )
            detail = HabitDetailResponse.model_validate(habit)
            detail.entries = [HabitEntryResponse.model_validate(e) for e in entries.scalars().all()]
            return success_response(detail)
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error getting habit {habit_id}: {e}")
            raise internal_error("Failed to get habit")

    @staticmethod
    async def update_habit(db: AsyncSession, user_id: str, habit_id: str, payload: HabitUpdate) -> Dict:
        try:
            habit = await HabitController._get_owned(db, user_id, habit_id)
            updates = payload.model_dump(exclude_unset=True)
            await check_payload_references(db, user_id, updates)
            for field, value in updates.items():
                setattr(habit, field, value)
            await db.commit()
            await db.refresh(habit)
            return success_response(HabitResponse.model_validate(habit))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error updating habit {habit_id}: {e}")
            raise internal_error("Failed to update habit")

    @staticmethod
    async def delete_habit(db: AsyncSession, user_id: str, habit_id: str) -> Dict:
        try:
            habit = await HabitController._get_owned(db, user_id, habit_id)
            await db.execute(delete(HabitEntry).where(HabitEntry.habit_id == habit.id))
            await db.delete(habit)
            await db.commit()
            return success_response(message="Habit deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting habit {habit_id}: {e}")
            raise internal_error("Failed to delete habit")

    @staticmethod
    async def check_in(db: AsyncSession, user_id: str, habit_id: str, payload: HabitCheckIn) -> Dict:
        """
        Upsert the entry for the given day (today by default). Without an
        explicit ``completed`` a new entry starts completed and an existing
        one is toggled.
        """
        try:
            habit = await HabitController._get_owned(db, user_id, habit_id)
            check_date = payload.date or datetime.utcnow().date()

            result = await db.execute(
                select(HabitEntry).where(HabitEntry.habit_id == habit.id, HabitEntry.date == check_date)
            )
            entry = result.scalar_one_or_none()

            if entry is not None:
                entry.completed = payload.completed if payload.completed is not None else not entry.completed
                if payload.notes is not None:
                    entry.notes = payload.notes
            else:
                entry = HabitEntry(
                    habit_id=habit.id,
                    date=check_date,
                    completed=payload.completed if payload.completed is not None else True,
                    notes=payload.notes,
                )
                db.add(entry)

            await db.commit()
            await db.refresh(entry)
            return success_response(HabitEntryResponse.model_validate(entry))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error checking in habit {habit_id}: {e}")
            raise internal_error("Failed to check in habit")

    @staticmethod
    async def list_entries(
        db: AsyncSession,
        user_id: str,
        habit_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict:
        try:
            habit = await HabitController._get_owned(db, user_id, habit_id)
            stmt = select(HabitEntry).where(HabitEntry.habit_id == habit.id)
            if start_date:
                stmt = stmt.where(HabitEntry.date >= start_date)
            if end_date:
                stmt = stmt.where(HabitEntry.date <= end_date)
            result = await db.execute(stmt.order_by(desc(HabitEntry.date)))
            return success_response([HabitEntryResponse.model_validate(e) for e in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing entries for habit {habit_id}: {e}")
            raise internal_error("Failed to get habit entries")

    @staticmethod
    async def get_streak(db: AsyncSession, user_id: str, habit_id: str) -> Dict:
        try:
            habit = await HabitController._get_owned(db, user_id, habit_id)
            result = await db.execute(
                select(HabitEntry.date).where(
                    HabitEntry.habit_id == habit.id,
                    HabitEntry.completed.is_(True),
                )
            )
            streak = calculate_streak(list(result.scalars().all()), datetime.utcnow().date())
            return success_response({"streak": streak})
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error computing streak for habit {habit_id}: {e}")
            raise internal_error("Failed to get habit streak")
