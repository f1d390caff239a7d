"""
Stripe Routes
Checkout requires a signed-in user; the webhook and the redirect landing
pages are public.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.stripe_controller import StripeController
from app.database.connection import get_db
from app.middlewares.auth import get_current_user_id
from app.schemas.subscription_schemas import CheckoutRequest

router = APIRouter(prefix="/stripe", tags=["Stripe"])


@router.post("/checkout", summary="Create Checkout Session")
async def create_checkout_session(
    payload: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    return await StripeController.create_checkout_session(db, user_id, payload)


@router.post("/webhook", summary="Stripe Webhook", description="Verified against the raw request body.")
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="stripe-signature"),
    db: AsyncSession = Depends(get_db)
):
    payload = await request.body()
    return await StripeController.handle_webhook(db, payload, stripe_signature)


@router.get("/success", summary="Checkout Success")
async def checkout_success():
    return {"success": True, "message": "Payment successful! Your subscription is now active."}


@router.get("/cancel", summary="Checkout Canceled")
async def checkout_cancel():
    return {"success": False, "message": "Payment was canceled."}
