"""
API v1 routes package.
Momentum productivity backend routes.
"""

from .auth_routes import router as auth_router
from .user_routes import router as user_router
from .subscription_routes import router as subscription_router
from .stripe_routes import router as stripe_router
from .workspace_routes import router as workspace_router
from .task_routes import router as task_router
from .habit_routes import router as habit_router
from .metric_routes import router as metric_router
from .pomodoro_routes import router as pomodoro_router
from .countdown_routes import router as countdown_router
from .integration_routes import router as integration_router
from .ai_routes import router as ai_router
from .file_routes import router as file_router
from .tabstash_routes import router as tabstash_router
from .sync_routes import router as sync_router
from .quote_routes import router as quote_router

__all__ = [
    "auth_router",
    "user_router",
    "subscription_router",
    "stripe_router",
    "workspace_router",
    "task_router",
    "habit_router",
    "metric_router",
    "pomodoro_router",
    "countdown_router",
    "integration_router",
    "ai_router",
    "file_router",
    "tabstash_router",
    "sync_router",
    "quote_router"
]
