from sqlalchemy import Column, String, ForeignKey, DateTime, JSON
from datetime import datetime
from app.database.base import Base
import cuid


class TabStash(Base):
    __tablename__ = "tab_stashes"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    tabs = Column(JSON, default=list, nullable=False)  # [{url, title, favIconUrl}]

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
