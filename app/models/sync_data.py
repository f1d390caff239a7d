from sqlalchemy import Column, String, ForeignKey, DateTime, Integer, JSON, UniqueConstraint
from datetime import datetime
from app.database.base import Base
import cuid


class SyncData(Base):
    """Opaque per-type blobs synced from the browser extension."""

    __tablename__ = "sync_data"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    data_type = Column(String(100), nullable=False)
    data = Column(JSON, nullable=False)
    version = Column(Integer, default=1, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "data_type", "workspace_id", name="uq_sync_user_type_workspace"),
    )
