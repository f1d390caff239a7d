"""
OAuth Service
Google and GitHub login through authlib; profiles are normalized before
being handed to AuthService.find_or_create_user.
"""

from dataclasses import dataclass
from typing import Optional

from authlib.integrations.starlette_client import OAuth
from fastapi import Request

from app.core.config import settings
from app.core.logger import get_logger
from app.enums import AuthProvider
from app.exceptions.errors import AuthenticationError

logger = get_logger("oauth_service")

oauth = OAuth()

oauth.register(
    name="google",
    client_id=settings.GOOGLE_CLIENT_ID,
    client_secret=settings.GOOGLE_CLIENT_SECRET,
    server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
    client_kwargs={"scope": "openid email profile"},
)

oauth.register(
    name="github",
    client_id=settings.GITHUB_CLIENT_ID,
    client_secret=settings.GITHUB_CLIENT_SECRET,
    access_token_url="https://github.com/login/oauth/access_token",
    authorize_url="https://github.com/login/oauth/authorize",
    api_base_url="https://api.github.com/",
    client_kwargs={"scope": "user:email"},
)


@dataclass
class OAuthProfile:
    email: str
    name: Optional[str]
    provider: str
    provider_id: str
    avatar_url: Optional[str] = None


def callback_url(provider: str) -> str:
    return f"{settings.API_URL}/api/v1/auth/{provider}/callback"


def _ensure_configured(provider: str) -> None:
    client_id = settings.GOOGLE_CLIENT_ID if provider == AuthProvider.GOOGLE.value else settings.GITHUB_CLIENT_ID
    if not client_id:
        raise AuthenticationError(f"{provider.capitalize()} login is not configured")


async def authorize_redirect(request: Request, provider: str):
    _ensure_configured(provider)
    client = oauth.create_client(provider)
    return await client.authorize_redirect(request, callback_url(provider))


async def fetch_google_profile(request: Request) -> OAuthProfile:
    _ensure_configured(AuthProvider.GOOGLE.value)
    token = await oauth.google.authorize_access_token(request)
    userinfo = token.get("userinfo") or {}

    email = userinfo.get("email")
    if not email:
        raise AuthenticationError("No email found in Google profile")

    return OAuthProfile(
        email=email,
        name=userinfo.get("name"),
        provider=AuthProvider.GOOGLE.value,
        provider_id=str(userinfo.get("sub")),
        avatar_url=userinfo.get("picture"),
    )


async def fetch_github_profile(request: Request) -> OAuthProfile:
    _ensure_configured(AuthProvider.GITHUB.value)
    token = await oauth.github.authorize_access_token(request)

    resp = await oauth.github.get("user", token=token)
    resp.raise_for_status()
    profile = resp.json()

    email = profile.get("email")
    if not email:
        emails_resp = await oauth.github.get("user/emails", token=token)
        if emails_resp.status_code == 200:
            emails = emails_resp.json() or []
            primary = next((e for e in emails if e.get("primary") and e.get("verified")), None)
            chosen = primary or (emails[0] if emails else None)
            email = chosen.get("email") if chosen else None

    if not email:
        # No public or verified email on the account
        email = f"{profile.get('login')}@github"

    return OAuthProfile(
        email=email,
        name=profile.get("name") or profile.get("login"),
        provider=AuthProvider.GITHUB.value,
        provider_id=str(profile.get("id")),
        avatar_url=profile.get("avatar_url"),
    )
