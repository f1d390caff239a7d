from datetime import date as date_type, datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class HabitCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)
    workspace_id: Optional[str] = None


class HabitUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)
    workspace_id: Optional[str] = None


class HabitCheckIn(CamelModel):
    date: Optional[date_type] = None
    completed: Optional[bool] = None
    notes: Optional[str] = None


class HabitEntryResponse(CamelModel):
    id: str
    habit_id: str
    date: date_type
    completed: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class HabitResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HabitDetailResponse(HabitResponse):
    entries: List[HabitEntryResponse] = Field(default_factory=list)
