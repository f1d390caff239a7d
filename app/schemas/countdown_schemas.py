from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class CountdownCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    target_date: datetime
    notify_before: Optional[int] = Field(None, ge=0, description="Minutes before target")
    workspace_id: Optional[str] = None


class CountdownUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    target_date: Optional[datetime] = None
    notify_before: Optional[int] = Field(None, ge=0)
    workspace_id: Optional[str] = None


class CountdownResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    name: str
    target_date: datetime
    notify_before: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
