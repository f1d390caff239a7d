"""
Auth Controller
OAuth callbacks, refresh-token rotation and logout.
"""
from typing import Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logger import get_logger
from app.exceptions.errors import (
    ApplicationException, AuthenticationError, ValidationError, internal_error
)
from app.middlewares.auth import UserIdentity
from app.schemas.auth_schemas import LogoutRequest, RefreshTokenRequest
from app.schemas.base_schemas import success_response
from app.services.auth_service import AuthService
from app.services.oauth_service import OAuthProfile

logger = get_logger("auth_controller")


class AuthController:

    @staticmethod
    async def complete_login(db: AsyncSession, request: Request, profile: OAuthProfile) -> Dict:
        try:
            user = await AuthService.find_or_create_user(
                db,
                email=profile.email,
                name=profile.name,
                provider=profile.provider,
                provider_id=profile.provider_id,
                avatar_url=profile.avatar_url,
            )
            request.state.identity = UserIdentity(user=user)

            tokens = await AuthService.issue_token_pair(db, user)
            logger.info(f"🔐 {profile.provider} login for user {user.id}")
            return success_response({
                "user": {
                    "id": user.id,
                    "email": user.email,
                    "name": user.name,
                    "avatarUrl": user.avatar_url,
                    "provider": user.provider,
                },
                "tokens": tokens.to_dict(),
            })
        except ApplicationException:
            raise
        except Exception as e:
            logger.error(f"❌ Error completing {profile.provider} login: {e}")
            raise internal_error("Authentication failed")

    @staticmethod
    async def refresh(db: AsyncSession, payload: RefreshTokenRequest) -> Dict:
        if not payload.refresh_token:
            raise ValidationError("Refresh token required")

        rotated = await AuthService.rotate_refresh_token(db, payload.refresh_token)
        if rotated is None:
            raise AuthenticationError("Invalid or expired refresh token")

        _, tokens = rotated
        return success_response(tokens.to_dict())

    @staticmethod
    async def logout(db: AsyncSession, payload: LogoutRequest) -> Dict:
        if payload.refresh_token:
            await AuthService.revoke_refresh_token(db, payload.refresh_token)
        return success_response(message="Logged out successfully")
