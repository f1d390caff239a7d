from typing import Any, Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class SyncRequest(CamelModel):
    data_type: str = Field(..., min_length=1, max_length=100)
    data: Any = Field(...)
    version: int
    workspace_id: Optional[str] = None


class SyncDataResponse(CamelModel):
    data_type: str
    data: Any = None
    version: int
    workspace_id: Optional[str] = None
