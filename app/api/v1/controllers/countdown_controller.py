"""
Countdown Controller
"""
from typing import Dict, Optional

from sqlalchemy import asc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.api.v1.controllers.references import check_payload_references
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.countdown_timer import CountdownTimer
from app.schemas.base_schemas import success_response
from app.schemas.countdown_schemas import CountdownCreate, CountdownUpdate, CountdownResponse

logger = get_logger("countdown_controller")


class CountdownController:

    @staticmethod
    async def _get_owned(db: AsyncSession, user_id: str, countdown_id: str) -> CountdownTimer:
        result = await db.execute(
            select(CountdownTimer).where(
                CountdownTimer.id == countdown_id,
                CountdownTimer.user_id == user_id,
            )
        )
        countdown = result.scalar_one_or_none()
        if countdown is None:
            raise NotFoundError("Countdown not found")
        return countdown

    @staticmethod
    async def create_countdown(db: AsyncSession, user_id: str, payload: CountdownCreate) -> Dict:
        try:
            values = payload.model_dump()
            await check_payload_references(db, user_id, values)
            countdown = CountdownTimer(user_id=user_id, **values)
            db.add(countdown)
            await db.commit()
            await db.refresh(countdown)
            return success_response(CountdownResponse.model_validate(countdown))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating countdown: {e}")
            raise internal_error("Failed to create countdown")

    @staticmethod
    async def list_countdowns(db: AsyncSession, user_id: str, workspace_id: Optional[str] = None) -> Dict:
        try:
            stmt = select(CountdownTimer).where(CountdownTimer.user_id == user_id)
            if workspace_id:
                stmt = stmt.where(CountdownTimer.workspace_id == workspace_id)
            result = await db.execute(stmt.order_by(asc(CountdownTimer.target_date)))
            return success_response([CountdownResponse.model_validate(c) for c in result.scalars().all()])
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error listing countdowns: {e}")
            raise internal_error("Failed to get countdowns")

    @staticmethod
    async def get_countdown(db: AsyncSession, user_id: str, countdown_id: str) -> Dict:
        countdown = await CountdownController._get_owned(db, user_id, countdown_id)
        return success_response(CountdownResponse.model_validate(countdown))

    @staticmethod
    async def update_countdown(
        db: AsyncSession, user_id: str, countdown_id: str, payload: CountdownUpdate
    ) -> Dict:
        try:
            countdown = await CountdownController._get_owned(db, user_id, countdown_id)
            updates = payload.model_dump(exclude_unset=True)
            await check_payload_references(db, user_id, updates)
            for field, value in updates.items():
                setattr(countdown, field, value)
            await db.commit()
            await db.refresh(countdown)
            return success_response(CountdownResponse.model_validate(countdown))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error updating countdown {countdown_id}: {e}")
            raise internal_error("Failed to update countdown")

    @staticmethod
    async def delete_countdown(db: AsyncSession, user_id: str, countdown_id: str) -> Dict:
        try:
            countdown = await CountdownController._get_owned(db, user_id, countdown_id)
            await db.delete(countdown)
            await db.commit()
            return success_response(message="Countdown deleted successfully")
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error deleting countdown {countdown_id}: {e}")
            raise internal_error("Failed to delete countdown")
