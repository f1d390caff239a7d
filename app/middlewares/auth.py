from dataclasses import dataclass
from typing import List, Optional, Union

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from app.core.logger import get_logger
from app.exceptions.errors import AuthenticationError
from app.models.user import User
from app.services.auth_service import AuthService

logger = get_logger("auth_middleware")

whitelisted_routes = [
    "/docs", "/openapi.json", "/redoc", "/favicon.ico", "/health",
    "/api/v1/auth",
    "/api/v1/stripe/webhook", "/api/v1/stripe/success", "/api/v1/stripe/cancel",
    "/api/v1/quotes",
]


@dataclass
class UserIdentity:
    """A full user record, e.g. right after an OAuth callback."""
    user: User

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email


@dataclass
class TokenIdentity:
    """Claims from a verified access token."""
    user_id: str
    email: str


Identity = Union[UserIdentity, TokenIdentity]


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "error": {"message": message}}
    )


class JWTAuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, whitelisted_routes: List[str] = None):
        super().__init__(app)
        self.whitelisted_routes = whitelisted_routes or []

    def _is_whitelisted(self, path: str) -> bool:
        """Check if the route is whitelisted (public)"""
        if path == "/":
            return True
        for route in self.whitelisted_routes:
            if path == route or path.startswith(route.rstrip("/") + "/"):
                return True
        return False

    async def dispatch(self, request: Request, call_next):
        """Verifies the bearer access token and attaches the identity"""

        if self._is_whitelisted(request.url.path):
            return await call_next(request)

        # CORS preflight
        if request.method == "OPTIONS":
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            logger.warning(f"Missing or invalid Authorization header for: {request.url.path}")
            return _unauthorized("Authentication required")

        payload = AuthService.verify_access_token(auth_header[len("Bearer "):].strip())
        if payload is None:
            logger.warning(f"Invalid or expired token for: {request.url.path}")
            return _unauthorized("Invalid or expired token")

        request.state.identity = TokenIdentity(user_id=payload.user_id, email=payload.email)
        return await call_next(request)


def get_identity(request: Request) -> Optional[Identity]:
    return getattr(request.state, "identity", None)


async def get_current_user_id(request: Request) -> str:
    """FastAPI dependency: the authenticated user's id, or 401."""
    identity = get_identity(request)
    if identity is None:
        raise AuthenticationError("User not authenticated")
    return identity.user_id
