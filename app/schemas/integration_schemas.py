from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from app.schemas.base_schemas import CamelModel


class IntegrationCreate(CamelModel):
    service: str = Field(..., min_length=1, max_length=50)
    access_token: str = Field(..., min_length=1)
    refresh_token: Optional[str] = None
    token_expires_at: Optional[datetime] = None
    extra_metadata: Optional[Dict[str, Any]] = Field(None, alias="metadata")


class IntegrationUpdate(CamelModel):
    access_token: Optional[str] = Field(None, min_length=1)
    refresh_token: Optional[str] = None
    token_expires_at: Optional[datetime] = None
    extra_metadata: Optional[Dict[str, Any]] = Field(None, alias="metadata")


class IntegrationResponse(CamelModel):
    """Tokens never leave the server; only their presence is reported."""
    id: str
    service: str
    has_access_token: bool = False
    has_refresh_token: bool = False
    token_expires_at: Optional[datetime] = None
    extra_metadata: Optional[Dict[str, Any]] = Field(
        None, validation_alias="extra_metadata", serialization_alias="metadata"
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, integration) -> "IntegrationResponse":
        return cls(
            id=integration.id,
            service=integration.service,
            has_access_token=bool(integration.access_token),
            has_refresh_token=bool(integration.refresh_token),
            token_expires_at=integration.token_expires_at,
            extra_metadata=integration.extra_metadata,
            created_at=integration.created_at,
            updated_at=integration.updated_at,
        )
