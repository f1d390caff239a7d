"""
Stripe Controller
"""
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logger import get_logger
from app.exceptions.errors import ApplicationException, ValidationError, internal_error
from app.schemas.base_schemas import success_response
from app.schemas.subscription_schemas import CheckoutRequest
from app.services.stripe_service import StripeService

logger = get_logger("stripe_controller")


class StripeController:

    @staticmethod
    async def create_checkout_session(db: AsyncSession, user_id: str, payload: CheckoutRequest) -> Dict:
        if not payload.plan_id:
            raise ValidationError("Plan ID is required")

        success_url = f"{settings.API_URL}/api/v1/stripe/success?session_id={{CHECKOUT_SESSION_ID}}"
        cancel_url = f"{settings.API_URL}/api/v1/stripe/cancel"

        try:
            session = await StripeService(db).create_checkout_session(
                user_id, payload.plan_id, success_url, cancel_url
            )
            logger.info(f"💳 Checkout session {session.get('id')} created for user {user_id}")
            return success_response({"sessionId": session.get("id"), "url": session.get("url")})
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error creating checkout session: {e}")
            raise internal_error("Failed to create checkout session")

    @staticmethod
    async def handle_webhook(db: AsyncSession, payload: bytes, signature: Optional[str]) -> Dict:
        try:
            await StripeService(db).handle_webhook(payload, signature)
            return {"received": True}
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Stripe webhook handling failed: {e}")
            raise ValidationError("Webhook handling failed")
