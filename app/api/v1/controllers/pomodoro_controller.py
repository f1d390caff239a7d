"""
Pomodoro Controller
"""
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import asc, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_payload_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.pomodoro_session import PomodoroSession
from app.schemas.base_schemas import success_response
from app.schemas.pomodoro_schemas import PomodoroCreate, PomodoroResponse, PomodoroStat

logger = get_logger("pomodoro_controller")


class PomodoroController:

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, session_id: str) -> PomodoroSession:
        result = await db.execute(
            select(PomodoroSession).where(
                PomodoroSession.id == session_id,
                PomodoroSession.user_id == user_id,
            )
        )
        session = result.scalar_one_or_none()
        if session is None:
            raise NotFoundError("Pomodoro session not found")
        return session

    @staticmethod
    async def create_session(db: AsyncSession, user_id: str, payload: PomodoroCreate) -> Dict:
        try:
            values = payload.model_dump()
            await check_payload_references(db, user_id, values)
            session = PomodoroSession(user_id=user_id, completed=False, **values)
            db.add(session)
            await db.commit()
            await db.refresh(session)
            return success_response(PomodoroResponse.model_validate(session))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating pomodoro session: {e}")
            raise internal_error("Failed to create pomodoro session")

    @staticmethod
    async def list_sessions(
        db: AsyncSession,
        user_id: str,
        workspace_id: Optional[str] = None,
        task_id: Optional[str] = None,
        completed: Optional[bool] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict:
        try:
            stmt = select(PomodoroSession).where(PomodoroSession.user_id == user_id)
            if workspace_id:
                stmt = stmt.where(PomodoroSession.workspace_id == workspace_id)
            if task_id:
                stmt = stmt.where(PomodoroSession.task_id == task_id)
            if completed is not None:
                stmt = stmt.where(PomodoroSession.completed == completed)
            if start_date:
                stmt = stmt.where(PomodoroSession.created_at >= start_date)
            if end_date:
                stmt = stmt.where(PomodoroSession.created_at <= end_date)
            result = await db.execute(stmt.order_by(desc(PomodoroSession.created_at)))
            return success_response([PomodoroResponse.model_validate(s) for s in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing pomodoro sessions: {e}")
            raise internal_error("Failed to get pomodoro sessions")

    @staticmethod
    async def start_session(db: AsyncSession, user_id: str, session_id: str) -> Dict:
        try:
            session = await PomodoroController._get_owned(db, user_id, session_id)
            session.started_at = datetime.utcnow()
            await db.commit()
            await db.refresh(session)
            return success_response(PomodoroResponse.model_validate(session))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error starting pomodoro session {session_id}: {e}")
            raise internal_error("Failed to start pomodoro session")

    @staticmethod
    async def complete_session(db: AsyncSession, user_id: str, session_id: str) -> Dict:
        try:
            session = await PomodoroController._get_owned(db, user_id, session_id)
            session.completed = True
            session.completed_at = datetime.utcnow()
            await db.commit()
            await db.refresh(session)
            return success_response(PomodoroResponse.model_validate(session))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error completing pomodoro session {session_id}: {e}")
            raise internal_error("Failed to complete pomodoro session")

    @staticmethod
    async def get_stats(
        db: AsyncSession,
        user_id: str,
        workspace_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Dict:
        """Completed sessions only, grouped by type."""
        try:
            stmt = select(
                PomodoroSession.type,
                func.count(PomodoroSession.id),
                func.sum(PomodoroSession.duration),
            ).where(
                PomodoroSession.user_id == user_id,
                PomodoroSession.completed.is_(True),
            )
            if workspace_id:
                stmt = stmt.where(PomodoroSession.workspace_id == workspace_id)
            if start_date:
                stmt = stmt.where(PomodoroSession.created_at >= start_date)
            if end_date:
                stmt = stmt.where(PomodoroSession.created_at <= end_date)
            stmt = stmt.group_by(PomodoroSession.type).order_by(asc(PomodoroSession.type))

            result = await db.execute(stmt)
            stats = [
                PomodoroStat(type=session_type, count=count, total_minutes=int(total or 0))
                for session_type, count, total in result.all()
            ]
            return success_response(stats)
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error computing pomodoro stats: {e}")
            raise internal_error("Failed to get pomodoro stats")
