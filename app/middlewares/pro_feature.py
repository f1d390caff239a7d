from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.exceptions.errors import AuthenticationError, ProRequiredError
from app.middlewares.auth import get_identity
from app.services.pro_cache import pro_status_cache
from app.services.subscription_service import SubscriptionService


async def require_pro(request: Request, db: AsyncSession = Depends(get_db)) -> str:
    """
    Route dependency for Pro-only features. Runs after authentication and
    returns the user id so handlers can depend on it directly.
    """
    identity = get_identity(request)
    if identity is None:
        raise AuthenticationError()

    user_id = identity.user_id
    is_pro = pro_status_cache.get(user_id)
    if is_pro is None:
        is_pro = await SubscriptionService.has_active_subscription(db, user_id)
        pro_status_cache.set(user_id, is_pro)

    if not is_pro:
        raise ProRequiredError()

    return user_id
