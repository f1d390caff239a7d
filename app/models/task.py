from sqlalchemy import Column, String, ForeignKey, DateTime, Boolean, Integer, Text, JSON, Index
from datetime import datetime
from app.database.base import Base
import cuid


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)
    priority = Column(String(10), default="medium", nullable=False)  # low, medium, high
    due_date = Column(DateTime, nullable=True)
    category = Column(String(100), nullable=True)
    tags = Column(JSON, default=list, nullable=False)

    # Subtasks point at their parent; deleting a parent removes them
    parent_task_id = Column(String(25), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True)
    position = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_task_user_position", "user_id", "position"),
    )
