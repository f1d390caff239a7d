"""
User Controller
"""
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.models.user import User
from app.schemas.auth_schemas import UserResponse, UserUpdate
from app.schemas.base_schemas import success_response

logger = get_logger("user_controller")


class UserController:

    @staticmethod
    async def get_current_user(db: AsyncSession, user_id: str) -> Dict:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return success_response(UserResponse.model_validate(user))

    @staticmethod
    async def update_current_user(db: AsyncSession, user_id: str, payload: UserUpdate) -> Dict:
        try:
            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")

            for field, value in payload.model_dump(exclude_unset=True).items():
                setattr(user, field, value)
            await db.commit()
            await db.refresh(user)
            return success_response(UserResponse.model_validate(user))
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error updating user {user_id}: {e}")
            raise internal_error("Failed to update user")
