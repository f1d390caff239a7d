from datetime import datetime, timedelta

from sqlalchemy.future import select

from app.models.subscription import Subscription
from app.services.pro_cache import pro_status_cache
from app.services.subscription_service import SubscriptionService
from tests.conftest import create_user


async def test_expired_period_is_persisted_as_expired(db):
    user = await create_user(db)
    db.add(Subscription(
        user_id=user.id,
        plan="price_pro",
        status="active",
        current_period_end=datetime.utcnow() - timedelta(days=1),
    ))
    await db.commit()

    assert await SubscriptionService.get_active_subscription(db, user.id) is None

    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    assert result.scalar_one().status == "expired"


async def test_second_active_subscription_cancels_the_first(db):
    user = await create_user(db)
    first = await SubscriptionService.create_subscription(db, user.id, plan="price_basic", stripe_subscription_id="sub_1")
    second = await SubscriptionService.create_subscription(db, user.id, plan="price_pro", stripe_subscription_id="sub_2")

    result = await db.execute(
        select(Subscription).where(Subscription.user_id == user.id, Subscription.status == "active")
    )
    active = result.scalars().all()
    assert [s.id for s in active] == [second.id]

    await db.refresh(first)
    assert first.status == "canceled"


async def test_create_with_known_stripe_id_updates_in_place(db):
    user = await create_user(db)
    end = datetime.utcnow() + timedelta(days=30)
    first = await SubscriptionService.create_subscription(
        db, user.id, plan="price_pro", stripe_subscription_id="sub_1", current_period_end=end
    )
    again = await SubscriptionService.create_subscription(
        db, user.id, plan="price_pro", stripe_subscription_id="sub_1", current_period_end=end
    )

    assert again.id == first.id
    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    rows = result.scalars().all()
    assert len(rows) == 1
    assert rows[0].status == "active"


async def test_mutations_invalidate_cached_status(db):
    user = await create_user(db)
    pro_status_cache.set(user.id, False)

    subscription = await SubscriptionService.create_subscription(db, user.id, plan="price_pro")
    assert pro_status_cache.get(user.id) is None

    pro_status_cache.set(user.id, True)
    await SubscriptionService.cancel_subscription(db, subscription.id, at_period_end=False)
    assert pro_status_cache.get(user.id) is None
    assert await SubscriptionService.has_active_subscription(db, user.id) is False


async def test_cancel_at_period_end_keeps_access(db):
    user = await create_user(db)
    subscription = await SubscriptionService.create_subscription(
        db, user.id, plan="price_pro", current_period_end=datetime.utcnow() + timedelta(days=3)
    )

    canceled = await SubscriptionService.cancel_subscription(db, subscription.id)
    assert canceled.cancel_at_period_end is True
    assert canceled.status == "active"
    assert await SubscriptionService.has_active_subscription(db, user.id) is True
