"""
Shared enums for the application.
"""

from .momentum_enums import (
    AuthProvider,
    SubscriptionStatus,
    TaskPriority,
    PomodoroType,
    AIProvider,
    MessageRole,
    StorageType
)

__all__ = [
    "AuthProvider",
    "SubscriptionStatus",
    "TaskPriority",
    "PomodoroType",
    "AIProvider",
    "MessageRole",
    "StorageType"
]
