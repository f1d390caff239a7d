"""
Subscription Controller
"""
from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, NotFoundError, internal_error
from app.schemas.base_schemas import success_response
from app.schemas.subscription_schemas import CancelSubscriptionRequest, SubscriptionResponse
from app.services.subscription_service import SubscriptionService

logger = get_logger("subscription_controller")


class SubscriptionController:

    @staticmethod
    async def get_subscription(db: AsyncSession, user_id: str) -> Dict:
        try:
            subscription = await SubscriptionService.get_active_subscription(db, user_id)
            return {
                "success": True,
                "data": SubscriptionResponse.model_validate(subscription) if subscription else None,
            }
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error getting subscription for user {user_id}: {e}")
            raise internal_error("Failed to get subscription")

    @staticmethod
    async def check_subscription(db: AsyncSession, user_id: str) -> Dict:
        try:
            has_active = await SubscriptionService.has_active_subscription(db, user_id)
            return success_response({"hasActiveSubscription": has_active})
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error checking subscription for user {user_id}: {e}")
            raise internal_error("Failed to check subscription")

    @staticmethod
    async def cancel_subscription(db: AsyncSession, user_id: str, payload: CancelSubscriptionRequest) -> Dict:
        try:
            subscription = await SubscriptionService.get_active_subscription(db, user_id)
            if subscription is None:
                raise NotFoundError("No active subscription found")

            canceled = await SubscriptionService.cancel_subscription(
                db, subscription.id, at_period_end=not payload.cancel_immediately
            )
            message = (
                "Subscription canceled immediately"
                if payload.cancel_immediately
                else "Subscription will be canceled at the end of the billing period"
            )
            logger.info(f"🛑 {message} (user {user_id})")
            return success_response(SubscriptionResponse.model_validate(canceled), message=message)
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error canceling subscription for user {user_id}: {e}")
            raise internal_error("Failed to cancel subscription")
