"""
Stripe Service
Checkout sessions, webhook signature verification and subscription reconciliation.
"""

import hashlib
import hmac
import json
import time
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logger import get_logger
from app.enums import SubscriptionStatus
from app.exceptions.errors import ValidationError, ServiceUnavailableError
from app.models.webhook_event import WebhookEvent
from app.services.subscription_service import SubscriptionService

logger = get_logger("stripe_service")

SIGNATURE_TOLERANCE_SECONDS = 300

# Stripe subscription status -> local status
STATUS_MAP = {
    "active": SubscriptionStatus.ACTIVE.value,
    "trialing": SubscriptionStatus.ACTIVE.value,
    "past_due": SubscriptionStatus.PAST_DUE.value,
    "incomplete": SubscriptionStatus.PAST_DUE.value,
    "paused": SubscriptionStatus.PAST_DUE.value,
    "canceled": SubscriptionStatus.CANCELED.value,
    "unpaid": SubscriptionStatus.CANCELED.value,
    "incomplete_expired": SubscriptionStatus.CANCELED.value,
}


def verify_webhook_signature(
    payload: bytes,
    signature_header: Optional[str],
    secret: str,
    tolerance: int = SIGNATURE_TOLERANCE_SECONDS,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Check a ``Stripe-Signature`` header against the raw request body and
    return the parsed event.

    The header looks like ``t=1700000000,v1=<hex>[,v1=<hex>...]``; the signed
    content is ``"{t}." + body`` keyed with the endpoint secret.
    """
    if not signature_header:
        raise ValidationError("Missing stripe-signature header")

    timestamp = None
    signatures = []
    for part in signature_header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t":
            timestamp = value
        elif key == "v1":
            signatures.append(value)

    if timestamp is None or not signatures:
        raise ValidationError("Unable to parse stripe-signature header")

    try:
        timestamp_value = int(timestamp)
    except ValueError:
        raise ValidationError("Unable to parse stripe-signature header")

    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    expected = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest().encode("ascii")

    if not any(hmac.compare_digest(expected, candidate.encode("utf-8")) for candidate in signatures):
        raise ValidationError("Webhook signature verification failed")

    current = time.time() if now is None else now
    if abs(current - timestamp_value) > tolerance:
        raise ValidationError("Webhook timestamp outside the tolerance zone")

    try:
        event = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationError("Invalid webhook payload")

    if not isinstance(event, dict) or "type" not in event:
        raise ValidationError("Invalid webhook payload")

    return event


def _from_epoch(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.utcfromtimestamp(int(value))


def _flatten_form(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Stripe's bracketed form encoding: ``{"a": {"b": 1}}`` -> ``{"a[b]": 1}``."""
    flat = {}
    for key, value in data.items():
        name = f"{prefix}[{key}]" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten_form(value, name))
        elif isinstance(value, list):
            for index, item in enumerate(value):
                item_name = f"{name}[{index}]"
                if isinstance(item, dict):
                    flat.update(_flatten_form(item, item_name))
                else:
                    flat[item_name] = item
        else:
            flat[name] = value
    return flat


class StripeService:
    """Talks to the Stripe REST API and applies webhook events to local state."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _request(self, method: str, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not settings.STRIPE_SECRET_KEY:
            raise ServiceUnavailableError("Stripe not configured")

        async with httpx.AsyncClient(base_url=settings.STRIPE_API_BASE, timeout=30.0) as client:
            response = await client.request(
                method,
                path,
                data=_flatten_form(data) if data else None,
                auth=(settings.STRIPE_SECRET_KEY, ""),
            )
            response.raise_for_status()
            return response.json()

    async def create_checkout_session(
        self, user_id: str, plan_id: str, success_url: str, cancel_url: str
    ) -> Dict[str, Any]:
        return await self._request("POST", "/checkout/sessions", {
            "mode": "subscription",
            "payment_method_types": ["card"],
            "line_items": [{"price": plan_id, "quantity": 1}],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "client_reference_id": user_id,
            "metadata": {"userId": user_id},
            # Carried onto the subscription so later subscription events can be attributed
            "subscription_data": {"metadata": {"userId": user_id}},
        })

    async def get_subscription(self, stripe_subscription_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/subscriptions/{stripe_subscription_id}")

    async def handle_webhook(self, payload: bytes, signature_header: Optional[str]) -> None:
        if not settings.STRIPE_WEBHOOK_SECRET:
            raise ServiceUnavailableError("Stripe webhook secret not configured")

        event = verify_webhook_signature(payload, signature_header, settings.STRIPE_WEBHOOK_SECRET)

        record = WebhookEvent.from_stripe_event(event)
        self.db.add(record)
        await self.db.commit()

        try:
            await self.dispatch(event)
        except Exception as e:
            await self.db.rollback()
            record.mark_failed(e)
            await self.db.commit()
            raise

        record.mark_processed()
        await self.db.commit()

    async def dispatch(self, event: Dict[str, Any]) -> None:
        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}

        logger.info(f"Stripe event {event.get('id')}: {event_type}")

        if event_type == "checkout.session.completed":
            await self._handle_checkout_completed(obj)
        elif event_type in ("customer.subscription.created", "customer.subscription.updated"):
            await self._handle_subscription_updated(obj)
        elif event_type == "customer.subscription.deleted":
            await self._handle_subscription_deleted(obj)
        elif event_type == "invoice.payment_succeeded":
            await self._handle_payment_succeeded(obj)
        elif event_type == "invoice.payment_failed":
            await self._handle_payment_failed(obj)
        else:
            logger.info(f"Unhandled webhook event type: {event_type}")

    async def _handle_checkout_completed(self, session: Dict[str, Any]) -> None:
        user_id = (session.get("metadata") or {}).get("userId")
        if not user_id:
            logger.warning("Checkout session missing userId metadata")
            return

        if session.get("mode") == "subscription" and session.get("subscription"):
            subscription = await self.get_subscription(session["subscription"])
            await self._handle_subscription_updated(subscription, fallback_user_id=user_id)

    async def _handle_subscription_updated(
        self, subscription: Dict[str, Any], fallback_user_id: Optional[str] = None
    ) -> None:
        user_id = (subscription.get("metadata") or {}).get("userId") or fallback_user_id
        if not user_id:
            logger.warning(f"Subscription {subscription.get('id')} missing userId metadata")
            return

        items = (subscription.get("items") or {}).get("data") or []
        first_item = items[0] if items else {}
        plan = (first_item.get("price") or {}).get("id") or "pro"

        # Newer API versions report the period on the item instead of the subscription
        period_start = subscription.get("current_period_start") or first_item.get("current_period_start")
        period_end = subscription.get("current_period_end") or first_item.get("current_period_end")

        stripe_status = subscription.get("status")
        status = STATUS_MAP.get(stripe_status)
        if status is None:
            # Unknown statuses never entitle
            logger.warning(f"Unknown Stripe status '{stripe_status}' on subscription {subscription.get('id')}, storing as past_due")
            status = SubscriptionStatus.PAST_DUE.value

        await SubscriptionService.create_subscription(
            self.db,
            user_id=user_id,
            plan=plan,
            stripe_subscription_id=subscription.get("id"),
            stripe_customer_id=subscription.get("customer"),
            current_period_start=_from_epoch(period_start),
            current_period_end=_from_epoch(period_end),
            status=status,
            cancel_at_period_end=bool(subscription.get("cancel_at_period_end", False)),
        )
        logger.info(f"Subscription updated for user: {user_id}")

    async def _handle_subscription_deleted(self, subscription: Dict[str, Any]) -> None:
        local = await SubscriptionService.get_subscription_by_stripe_id(self.db, subscription.get("id"))
        if local is None:
            logger.info(f"No local subscription for deleted Stripe subscription {subscription.get('id')}")
            return
        await SubscriptionService.update_subscription(
            self.db, local.id, status=SubscriptionStatus.CANCELED.value
        )
        logger.info(f"Subscription canceled: {subscription.get('id')}")

    async def _handle_payment_succeeded(self, invoice: Dict[str, Any]) -> None:
        stripe_subscription_id = invoice.get("subscription")
        if not stripe_subscription_id:
            return
        subscription = await self.get_subscription(stripe_subscription_id)
        await self._handle_subscription_updated(subscription)

    async def _handle_payment_failed(self, invoice: Dict[str, Any]) -> None:
        stripe_subscription_id = invoice.get("subscription")
        if not stripe_subscription_id:
            return
        local = await SubscriptionService.get_subscription_by_stripe_id(self.db, stripe_subscription_id)
        if local is None:
            return
        await SubscriptionService.update_subscription(
            self.db, local.id, status=SubscriptionStatus.PAST_DUE.value
        )
        logger.warning(f"Payment failed for subscription: {stripe_subscription_id}")
