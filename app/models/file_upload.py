from sqlalchemy import Column, String, ForeignKey, DateTime, Integer, JSON
from datetime import datetime
from app.database.base import Base
import cuid


class FileUpload(Base):
    __tablename__ = "file_uploads"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    file_name = Column(String(255), nullable=False)
    file_path = Column(String(1024), nullable=False)  # storage key (local path or s3 key)
    file_type = Column(String(50), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(100), nullable=False)
    extra_metadata = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
