from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class WorkspaceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    is_default: bool = False


class WorkspaceUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    is_default: Optional[bool] = None


class WorkspaceResponse(CamelModel):
    id: str
    user_id: str
    name: str
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
