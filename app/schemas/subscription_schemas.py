from datetime import datetime
from typing import Optional

from app.schemas.base_schemas import CamelModel


class CancelSubscriptionRequest(CamelModel):
    cancel_immediately: bool = False


class CheckoutRequest(CamelModel):
    plan_id: Optional[str] = None


class SubscriptionResponse(CamelModel):
    id: str
    user_id: str
    plan: str
    status: str
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
