from datetime import date as date_type, datetime
from typing import Any, Dict, Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class MetricCreate(CamelModel):
    metric_type: str = Field(..., min_length=1, max_length=100)
    value: float
    date: date_type
    extra_metadata: Optional[Dict[str, Any]] = Field(None, alias="metadata")
    workspace_id: Optional[str] = None


class MetricResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    metric_type: str
    value: float
    date: date_type
    extra_metadata: Optional[Dict[str, Any]] = Field(
        None, validation_alias="extra_metadata", serialization_alias="metadata"
    )
    created_at: Optional[datetime] = None


class MetricStat(CamelModel):
    type: str
    total: float
    average: float
    count: int
    min: float
    max: float
