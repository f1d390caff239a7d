from sqlalchemy import Column, String, ForeignKey, DateTime, Date, Numeric, JSON, Index
from datetime import datetime
from app.database.base import Base
import cuid


class Metric(Base):
    __tablename__ = "metrics"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(String(25), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workspace_id = Column(String(25), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=True, index=True)

    metric_type = Column(String(100), nullable=False)
    value = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    date = Column(Date, nullable=False)
    # "metadata" is reserved on declarative classes
    extra_metadata = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_metric_user_type_date", "user_id", "metric_type", "date"),
    )
