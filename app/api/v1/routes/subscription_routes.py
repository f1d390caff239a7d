"""
Subscription Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.subscription_controller import SubscriptionController
from app.database.connection import get_db
from app.middlewares.auth import get_current_user_id
from app.schemas.subscription_schemas import CancelSubscriptionRequest

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.get("", summary="Active Subscription")
async def get_subscription(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return await SubscriptionController.get_subscription(db, user_id)


@router.get("/check", summary="Has Active Subscription")
async def check_subscription(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return await SubscriptionController.check_subscription(db, user_id)


@router.post("/cancel", summary="Cancel Subscription")
async def cancel_subscription(
    payload: Optional[CancelSubscriptionRequest] = None,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return await SubscriptionController.cancel_subscription(
        db, user_id, payload or CancelSubscriptionRequest()
    )
