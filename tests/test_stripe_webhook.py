import hashlib
import hmac
import json
import time
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.future import select

from app.exceptions.errors import ValidationError
from app.models.subscription import Subscription
from app.models.webhook_event import WebhookEvent
from app.services.stripe_service import StripeService, _flatten_form, verify_webhook_signature
from app.services.subscription_service import SubscriptionService
from tests.conftest import create_user

SECRET = "whsec_test"


def sign(body: bytes, secret: str = SECRET, timestamp: int = None) -> str:
    timestamp = int(time.time()) if timestamp is None else timestamp
    digest = hmac.new(secret.encode(), f"{timestamp}.".encode() + body, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def subscription_object(user_id: str, status: str = "active", sub_id: str = "sub_123") -> dict:
    now = int(time.time())
    return {
        "id": sub_id,
        "object": "subscription",
        "customer": "cus_123",
        "status": status,
        "cancel_at_period_end": False,
        "current_period_start": now,
        "current_period_end": now + 30 * 24 * 3600,
        "metadata": {"userId": user_id},
        "items": {"data": [{"price": {"id": "price_pro_monthly"}}]},
    }


def event(event_type: str, obj: dict, event_id: str = "evt_1") -> bytes:
    return json.dumps({"id": event_id, "type": event_type, "data": {"object": obj}}).encode()


def test_signature_accepts_valid_header():
    body = b'{"id": "evt_1", "type": "ping"}'
    parsed = verify_webhook_signature(body, sign(body), SECRET)
    assert parsed["type"] == "ping"


@pytest.mark.parametrize("header", [None, "", "garbage", "t=abc,v1=00", "v1=deadbeef"])
def test_signature_rejects_malformed_headers(header):
    with pytest.raises(ValidationError):
        verify_webhook_signature(b"{}", header, SECRET)


def test_signature_rejects_wrong_secret_and_tampered_body():
    body = b'{"id": "evt_1", "type": "ping"}'
    with pytest.raises(ValidationError):
        verify_webhook_signature(body, sign(body, secret="whsec_other"), SECRET)
    with pytest.raises(ValidationError):
        verify_webhook_signature(body + b" ", sign(body), SECRET)


def test_signature_rejects_stale_timestamp():
    body = b'{"id": "evt_1", "type": "ping"}'
    old = int(time.time()) - 301
    with pytest.raises(ValidationError) as exc:
        verify_webhook_signature(body, sign(body, timestamp=old), SECRET)
    assert "tolerance" in exc.value.message


def test_flatten_form_uses_bracket_notation():
    flat = _flatten_form({
        "mode": "subscription",
        "line_items": [{"price": "price_1", "quantity": 1}],
        "metadata": {"userId": "u1"},
    })
    assert flat == {
        "mode": "subscription",
        "line_items[0][price]": "price_1",
        "line_items[0][quantity]": 1,
        "metadata[userId]": "u1",
    }


async def test_invalid_signature_is_rejected_without_state_change(client, db):
    user = await create_user(db)
    body = event("customer.subscription.updated", subscription_object(user.id))

    response = await client.post(
        "/api/v1/stripe/webhook",
        content=body,
        headers={"stripe-signature": sign(body, secret="whsec_wrong"), "content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    result = await db.execute(select(Subscription))
    assert result.scalars().all() == []


async def test_missing_signature_header_is_rejected(client):
    response = await client.post("/api/v1/stripe/webhook", content=b"{}")
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing stripe-signature header"


async def test_subscription_updated_is_idempotent(client, db):
    user = await create_user(db)
    body = event("customer.subscription.updated", subscription_object(user.id))

    for _ in range(2):
        response = await client.post(
            "/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)}
        )
        assert response.status_code == 200
        assert response.json() == {"received": True}

    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    rows = result.scalars().all()
    assert len(rows) == 1
    assert rows[0].status == "active"
    assert rows[0].plan == "price_pro_monthly"
    assert rows[0].stripe_subscription_id == "sub_123"

    events = await db.execute(select(WebhookEvent))
    recorded = events.scalars().all()
    assert len(recorded) == 2
    assert all(e.processed for e in recorded)


async def test_subscription_deleted_cancels_local_row(client, db):
    user = await create_user(db)
    created = event("customer.subscription.created", subscription_object(user.id), event_id="evt_1")
    deleted = event("customer.subscription.deleted", subscription_object(user.id, status="canceled"), event_id="evt_2")

    for body in (created, deleted):
        response = await client.post(
            "/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)}
        )
        assert response.status_code == 200

    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    assert result.scalar_one().status == "canceled"


async def test_payment_failed_marks_past_due(client, db):
    user = await create_user(db)
    created = event("customer.subscription.created", subscription_object(user.id), event_id="evt_1")
    failed = event("invoice.payment_failed", {"id": "in_1", "subscription": "sub_123"}, event_id="evt_2")

    for body in (created, failed):
        await client.post("/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)})

    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    assert result.scalar_one().status == "past_due"


@pytest.mark.parametrize("stripe_status", ["paused", "some_future_status"])
async def test_non_active_statuses_do_not_grant_pro(client, db, stripe_status):
    user = await create_user(db)
    body = event("customer.subscription.updated", subscription_object(user.id, status=stripe_status))

    response = await client.post("/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)})
    assert response.status_code == 200

    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    assert result.scalar_one().status == "past_due"
    assert await SubscriptionService.has_active_subscription(db, user.id) is False


async def test_checkout_completed_fetches_subscription(client, db, monkeypatch):
    user = await create_user(db)
    stripe_subscription = subscription_object(user.id)
    stripe_subscription["metadata"] = {}
    fetch = AsyncMock(return_value=stripe_subscription)
    monkeypatch.setattr(StripeService, "get_subscription", fetch)

    session = {
        "id": "cs_1",
        "mode": "subscription",
        "subscription": "sub_123",
        "metadata": {"userId": user.id},
    }
    body = event("checkout.session.completed", session)
    response = await client.post("/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)})

    assert response.status_code == 200
    fetch.assert_awaited_once_with("sub_123")
    result = await db.execute(select(Subscription).where(Subscription.user_id == user.id))
    assert result.scalar_one().status == "active"


async def test_event_without_user_metadata_is_acknowledged(client, db):
    obj = subscription_object("ignored")
    obj["metadata"] = {}
    body = event("customer.subscription.updated", obj)

    response = await client.post("/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)})

    assert response.status_code == 200
    result = await db.execute(select(Subscription))
    assert result.scalars().all() == []


async def test_unknown_event_type_is_ignored(client):
    body = event("customer.created", {"id": "cus_1"})
    response = await client.post("/api/v1/stripe/webhook", content=body, headers={"stripe-signature": sign(body)})
    assert response.status_code == 200
