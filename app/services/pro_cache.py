"""
Short-lived per-user cache of Pro entitlement.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from app.core.config import settings


class ProStatusCache:
    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[bool, float]] = {}

    def get(self, user_id: str) -> Optional[bool]:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        is_pro, stored_at = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[user_id]
            return None
        return is_pro

    def set(self, user_id: str, is_pro: bool) -> None:
        self._entries[user_id] = (is_pro, self._clock())

    def invalidate(self, user_id: str) -> None:
        self._entries.pop(user_id, None)

    def clear(self) -> None:
        self._entries.clear()


pro_status_cache = ProStatusCache(ttl_seconds=settings.PRO_CACHE_TTL_SECONDS)


def clear_pro_cache(user_id: Optional[str] = None) -> None:
    """Drop one user's cached status, or everything when no user is given."""
    if user_id is None:
        pro_status_cache.clear()
    else:
        pro_status_cache.invalidate(user_id)
