from datetime import datetime
from typing import Optional

from pydantic import Field

from app.enums import PomodoroType
from app.schemas.base_schemas import CamelModel


class PomodoroCreate(CamelModel):
    duration: int = Field(..., gt=0, description="Length in minutes")
    type: PomodoroType
    task_id: Optional[str] = None
    workspace_id: Optional[str] = None


class PomodoroResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    task_id: Optional[str] = None
    duration: int
    type: str
    completed: bool
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class PomodoroStat(CamelModel):
    type: str
    count: int
    total_minutes: int
