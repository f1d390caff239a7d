from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class StashedTab(CamelModel):
    url: str
    title: Optional[str] = None
    fav_icon_url: Optional[str] = None


class TabStashCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    tabs: List[StashedTab]
    workspace_id: Optional[str] = None


class TabStashUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    tabs: Optional[List[StashedTab]] = None
    workspace_id: Optional[str] = None


class TabStashResponse(CamelModel):
    id: str
    user_id: str
    workspace_id: Optional[str] = None
    name: str
    tabs: List[StashedTab] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
