from sqlalchemy import Column, String, ForeignKey, DateTime, Date, Boolean, Text, UniqueConstraint
from datetime import datetime
from app.database.base import Base
import cuid


class Habit(Base):
    __tablename__ = "habits"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class HabitEntry(Base):
    """One check-in per habit per calendar day."""

    __tablename__ = "habit_entries"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    habit_id = Column(String(25), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    completed = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("habit_id", "date", name="uq_habit_entry_day"),
    )
