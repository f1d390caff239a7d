from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.enums import TaskPriority
from app.schemas.base_schemas import CamelModel


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = None
    category: Optional[str] = Field(None, max_length=100)
    tags: List[str] = Field(default_factory=list)
    parent_task_id: Optional[str] = None
    workspace_id: Optional[str] = None
    position: int = 0


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    category: Optional[str] = Field(None, max_length=100)
    tags: Optional[List[str]] = None
    parent_task_id: Optional[str] = None
    workspace_id: Optional[str] = None
    position: Optional[int] = None


class TaskResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    completed: bool
    priority: str
    due_date: Optional[datetime] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    parent_task_id: Optional[str] = None
    position: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskDetailResponse(TaskResponse):
    subtasks: List[TaskResponse] = Field(default_factory=list)
    parent_task: Optional[TaskResponse] = None
