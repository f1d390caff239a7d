from sqlalchemy import Column, String, ForeignKey, DateTime, JSON
from datetime import datetime
from app.database.base import Base
import cuid


class AIConversation(Base):
    __tablename__ = "ai_conversations"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    type = Column(String(50), nullable=False)  # chat, summarize, organize
    title = Column(String(255), nullable=True)
    messages = Column(JSON, default=list, nullable=False)  # [{role, content, timestamp}]

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
