from sqlalchemy import Column, String, ForeignKey, DateTime, Text, JSON, UniqueConstraint
from datetime import datetime
from app.database.base import Base
import cuid


class Integration(Base):
    """
    Third-party service credentials (todoist, notion, google_calendar, ...).
    Tokens are write-only from the API's point of view.
    """
    __tablename__ = "integrations"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    service = Column(String(50), nullable=False)
    access_token = Column(Text, nullable=False)
    refresh_token = Column(Text, nullable=True)
    token_expires_at = Column(DateTime, nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "service", name="uq_integration_user_service"),
    )
