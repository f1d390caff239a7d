from sqlalchemy import Column, String, ForeignKey, DateTime, Integer
from datetime import datetime
from app.database.base import Base
import cuid


class CountdownTimer(Base):
    __tablename__ = "countdown_timers"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    target_date = Column(DateTime, nullable=False)
    notify_before = Column(Integer, nullable=True)  # minutes

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
