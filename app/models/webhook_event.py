from sqlalchemy import Column, String, DateTime, Boolean, Text, JSON, Index
from datetime import datetime
from app.database.base import Base
import cuid


class WebhookEvent(Base):
    """
    One row per verified Stripe event delivery. Kept for auditing; replays
    of the same event id are stored again and re-applied.
    """
    __tablename__ = "webhook_events"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    provider = Column(String(40), nullable=False, default="stripe")
    external_event_id = Column(String(255), nullable=True, index=True)  # evt_...
    event_type = Column(String(80), nullable=True)
    livemode = Column(Boolean, default=False, nullable=False)
    payload = Column(JSON, nullable=True)
    received_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    processed = Column(Boolean, default=False, nullable=False)
    processed_at = Column(DateTime, nullable=True)
    error_message = Column(Text, nullable=True)

    __table_args__ = (
        Index("ix_webhook_provider_time", "provider", "received_at"),
        Index("ix_webhook_processed_time", "processed", "received_at"),
    )

    @classmethod
    def from_stripe_event(cls, event: dict) -> "WebhookEvent":
        return cls(
            provider="stripe",
            external_event_id=event.get("id"),
            event_type=event.get("type"),
            livemode=bool(event.get("livemode", False)),
            payload=event,
        )

    def mark_processed(self):
        self.processed = True
        self.processed_at = datetime.utcnow()
        self.error_message = None

    def mark_failed(self, error: Exception):
        self.processed = False
        self.error_message = str(error)
