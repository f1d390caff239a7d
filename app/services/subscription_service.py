"""
Subscription Service
Pro entitlement: lazy expiry on read, single active subscription per user.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import update, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.logger import get_logger
from app.enums import SubscriptionStatus
from app.models.subscription import Subscription
from app.services.pro_cache import clear_pro_cache

logger = get_logger("subscription_service")


class SubscriptionService:

    @staticmethod
    async def get_active_subscription(db: AsyncSession, user_id: str) -> Optional[Subscription]:
        """
        Most recent active subscription for the user.

        An active row whose period has already ended is flipped to expired
        and persisted as part of this read.
        """
        result = await db.execute(
            select(Subscription)
            .where(
                Subscription.user_id == user_id,
                Subscription.status == SubscriptionStatus.ACTIVE.value,
            )
            .order_by(desc(Subscription.created_at))
            .limit(1)
        )
        subscription = result.scalar_one_or_none()
        if subscription is None:
            return None

        if subscription.current_period_end and subscription.current_period_end < datetime.utcnow():
            subscription.status = SubscriptionStatus.EXPIRED.value
            await db.commit()
            clear_pro_cache(user_id)
            logger.info(f"Subscription {subscription.id} for user {user_id} expired")
            return None

        return subscription

    @staticmethod
    async def has_active_subscription(db: AsyncSession, user_id: str) -> bool:
        return await SubscriptionService.get_active_subscription(db, user_id) is not None

    @staticmethod
    async def get_subscription_by_stripe_id(
        db: AsyncSession, stripe_subscription_id: str
    ) -> Optional[Subscription]:
        result = await db.execute(
            select(Subscription).where(Subscription.stripe_subscription_id == stripe_subscription_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create_subscription(
        db: AsyncSession,
        user_id: str,
        plan: str,
        stripe_subscription_id: Optional[str] = None,
        stripe_customer_id: Optional[str] = None,
        current_period_start: Optional[datetime] = None,
        current_period_end: Optional[datetime] = None,
        status: str = SubscriptionStatus.ACTIVE.value,
        cancel_at_period_end: bool = False,
    ) -> Subscription:
        """
        Persist the user's current subscription.

        Prior active subscriptions are canceled in the same transaction. A row
        already carrying this Stripe id is updated in place, so replaying the
        same event converges to the same state.
        """
        existing = None
        if stripe_subscription_id:
            existing = await SubscriptionService.get_subscription_by_stripe_id(db, stripe_subscription_id)

        if status == SubscriptionStatus.ACTIVE.value:
            stmt = (
                update(Subscription)
                .where(
                    Subscription.user_id == user_id,
                    Subscription.status == SubscriptionStatus.ACTIVE.value,
                )
                .values(status=SubscriptionStatus.CANCELED.value)
            )
            if existing is not None:
                stmt = stmt.where(Subscription.id != existing.id)
            await db.execute(stmt)

        if existing is None:
            subscription = Subscription(user_id=user_id)
            db.add(subscription)
        else:
            subscription = existing

        subscription.user_id = user_id
        subscription.plan = plan
        subscription.status = status
        subscription.stripe_subscription_id = stripe_subscription_id
        subscription.stripe_customer_id = stripe_customer_id
        subscription.current_period_start = current_period_start
        subscription.current_period_end = current_period_end
        subscription.cancel_at_period_end = cancel_at_period_end

        await db.commit()
        await db.refresh(subscription)
        clear_pro_cache(user_id)

        logger.info(f"Subscription {subscription.id} for user {user_id} is now {status}")
        return subscription

    @staticmethod
    async def update_subscription(db: AsyncSession, subscription_id: str, **updates) -> Optional[Subscription]:
        subscription = await db.get(Subscription, subscription_id)
        if subscription is None:
            return None

        for field, value in updates.items():
            if hasattr(subscription, field):
                setattr(subscription, field, value)

        await db.commit()
        await db.refresh(subscription)
        clear_pro_cache(subscription.user_id)
        return subscription

    @staticmethod
    async def cancel_subscription(
        db: AsyncSession, subscription_id: str, at_period_end: bool = True
    ) -> Optional[Subscription]:
        """Flag for cancellation at period end, or cancel right away."""
        updates = {"cancel_at_period_end": at_period_end}
        if not at_period_end:
            updates["status"] = SubscriptionStatus.CANCELED.value
        return await SubscriptionService.update_subscription(db, subscription_id, **updates)
