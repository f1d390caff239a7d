from sqlalchemy import Column, String, ForeignKey, DateTime, Boolean, Index
from datetime import datetime
from app.database.base import Base
import cuid


class Workspace(Base):
    """User-defined grouping that other resources may optionally belong to."""

    __tablename__ = "workspaces"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_workspace_user_default", "user_id", "is_default"),
    )
