from sqlalchemy import Column, String, ForeignKey, DateTime, Boolean, Integer
from datetime import datetime
from app.database.base import Base
import cuid


class PomodoroSession(Base):
    __tablename__ = "pomodoro_sessions"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)
    task_id = Column(String(25), ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True)

    duration = Column(Integer, nullable=False)  # minutes
    type = Column(String(20), nullable=False)  # work, short_break, long_break
    completed = Column(Boolean, default=False, nullable=False)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
