from datetime import datetime
from typing import Optional

from app.schemas.base_schemas import CamelModel


class RefreshTokenRequest(CamelModel):
    refresh_token: Optional[str] = None


class LogoutRequest(CamelModel):
    refresh_token: Optional[str] = None


class TokenPairResponse(CamelModel):
    access_token: str
    refresh_token: str


class UserResponse(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    name: Optional[str] = None
    avatar_url: Optional[str] = None
