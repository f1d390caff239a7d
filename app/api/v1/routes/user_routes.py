"""
User Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.user_controller import UserController
from app.database.connection import get_db
from app.middlewares.auth import get_current_user_id
from app.schemas.auth_schemas import UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", summary="Current User")
async def get_me(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return await UserController.get_current_user(db, user_id)


@router.put("/me", summary="Update Current User")
async def update_me(
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return await UserController.update_current_user(db, user_id, payload)
