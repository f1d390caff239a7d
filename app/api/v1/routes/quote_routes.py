"""
Quote Routes
"""
from typing import Optional

from fastapi import APIRouter

from app.schemas.base_schemas import success_response
from app.services.quotes_service import QuotesService

router = APIRouter(prefix="/quotes", tags=["Quotes"])


@router.get("/daily", summary="Quote Of The Day")
async def get_daily_quote():
    return success_response(QuotesService.get_daily_quote())


@router.get("/random", summary="Random Quote", description="Falls back to any quote when the category is unknown.")
async def get_random_quote(category: Optional[str] = None):
    return success_response(QuotesService.get_random_quote(category))
