"""
Auth Routes
"""
from typing import Optional

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.controllers.auth_controller import AuthController
from app.core.logger import get_logger
from app.database.connection import get_db
from app.enums import AuthProvider
from app.schemas.auth_schemas import LogoutRequest, RefreshTokenRequest
from app.services import oauth_service

logger = get_logger("auth_routes")

router = APIRouter(prefix="/auth", tags=["Auth"])

FAILURE_PATH = "/api/v1/auth/failure"


@router.get("/google", summary="Google Login")
async def google_login(request: Request):
    return await oauth_service.authorize_redirect(request, AuthProvider.GOOGLE.value)


@router.get("/google/callback", summary="Google Callback")
async def google_callback(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        profile = await oauth_service.fetch_google_profile(request)
    except OAuthError as e:
        logger.warning(f"Google OAuth failed: {e}")
        return RedirectResponse(FAILURE_PATH)
    return await AuthController.complete_login(db, request, profile)


@router.get("/github", summary="GitHub Login")
async def github_login(request: Request):
    return await oauth_service.authorize_redirect(request, AuthProvider.GITHUB.value)


@router.get("/github/callback", summary="GitHub Callback")
async def github_callback(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        profile = await oauth_service.fetch_github_profile(request)
    except OAuthError as e:
        logger.warning(f"GitHub OAuth failed: {e}")
        return RedirectResponse(FAILURE_PATH)
    return await AuthController.complete_login(db, request, profile)


@router.get("/failure", summary="OAuth Failure")
async def auth_failure():
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "error": {"message": "OAuth authentication failed. Please try again."}}
    )


@router.post("/refresh", summary="Rotate Refresh Token")
async def refresh_token(
    payload: Optional[RefreshTokenRequest] = None,
    db: AsyncSession = Depends(get_db)
):
    return await AuthController.refresh(db, payload or RefreshTokenRequest())


@router.post("/logout", summary="Logout")
async def logout(
    payload: Optional[LogoutRequest] = None,
    db: AsyncSession = Depends(get_db)
):
    return await AuthController.logout(db, payload or LogoutRequest())
