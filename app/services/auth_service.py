"""
Auth Service
Issues, verifies and rotates JWT token pairs and resolves OAuth profiles to users.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple
import uuid

from jose import jwt, JWTError
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.config import settings
from app.core.logger import get_logger
from app.models.refresh_token import RefreshToken
from app.models.user import User

logger = get_logger("auth_service")


@dataclass
class TokenPayload:
    user_id: str
    email: str


@dataclass
class TokenPair:
    access_token: str
    refresh_token: str

    def to_dict(self) -> dict:
        return {"accessToken": self.access_token, "refreshToken": self.refresh_token}


def _encode(user: User, secret: str, lifetime: timedelta) -> str:
    claims = {
        "userId": user.id,
        "email": user.email,
        "exp": datetime.utcnow() + lifetime,
        # Two tokens for the same user in the same second must still differ
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(claims, secret, algorithm=settings.JWT_ALGORITHM)


def _decode(token: str, secret: str) -> Optional[TokenPayload]:
    try:
        claims = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    user_id = claims.get("userId")
    email = claims.get("email")
    if not user_id or not email:
        return None
    return TokenPayload(user_id=user_id, email=email)


class AuthService:
    """Token lifecycle. Verification failures surface as None, never as exceptions."""

    @staticmethod
    async def issue_token_pair(db: AsyncSession, user: User) -> TokenPair:
        access_token = _encode(
            user, settings.JWT_SECRET, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        refresh_lifetime = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        refresh_token = _encode(user, settings.JWT_REFRESH_SECRET, refresh_lifetime)

        db.add(RefreshToken(
            user_id=user.id,
            token=refresh_token,
            expires_at=datetime.utcnow() + refresh_lifetime,
        ))
        await db.commit()

        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    @staticmethod
    def verify_access_token(token: str) -> Optional[TokenPayload]:
        """Signature and expiry check only; no database access."""
        return _decode(token, settings.JWT_SECRET)

    @staticmethod
    async def verify_refresh_token(db: AsyncSession, token: str) -> Optional[TokenPayload]:
        payload = _decode(token, settings.JWT_REFRESH_SECRET)
        if payload is None:
            return None

        result = await db.execute(
            select(RefreshToken).where(
                RefreshToken.token == token,
                RefreshToken.user_id == payload.user_id,
            )
        )
        stored = result.scalar_one_or_none()
        if stored is None or stored.expires_at < datetime.utcnow():
            return None

        return payload

    @staticmethod
    async def revoke_refresh_token(db: AsyncSession, token: str) -> None:
        await db.execute(delete(RefreshToken).where(RefreshToken.token == token))
        await db.commit()

    @staticmethod
    async def revoke_all_for_user(db: AsyncSession, user_id: str) -> None:
        await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await db.commit()

    @staticmethod
    async def rotate_refresh_token(db: AsyncSession, token: str) -> Optional[Tuple[User, TokenPair]]:
        """
        Exchange a refresh token for a new pair.

        The old row is deleted with a conditional DELETE; if another request
        consumed the same token first, the rowcount is 0 and rotation fails.
        """
        payload = await AuthService.verify_refresh_token(db, token)
        if payload is None:
            return None

        result = await db.execute(delete(RefreshToken).where(RefreshToken.token == token))
        if result.rowcount != 1:
            await db.rollback()
            logger.warning(f"Refresh token for user {payload.user_id} was already consumed")
            return None

        user = await db.get(User, payload.user_id)
        if user is None:
            await db.rollback()
            return None

        # issue_token_pair commits the delete and the new row together
        pair = await AuthService.issue_token_pair(db, user)
        return user, pair

    @staticmethod
    async def find_or_create_user(
        db: AsyncSession,
        email: str,
        name: Optional[str],
        provider: str,
        provider_id: Optional[str],
        avatar_url: Optional[str] = None,
    ) -> User:
        """Look up by email; the latest login's profile fields win."""
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None:
            user = User(
                email=email,
                name=name,
                avatar_url=avatar_url,
                provider=provider,
                provider_id=provider_id,
            )
            db.add(user)
            await db.commit()
            await db.refresh(user)
            logger.info(f"✅ Created user {user.id} via {provider}")
            return user

        user.name = name
        user.avatar_url = avatar_url
        user.provider = provider
        user.provider_id = provider_id
        await db.commit()
        await db.refresh(user)
        logger.info(f"Updated user {user.id} on {provider} login")
        return user
