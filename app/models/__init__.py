"""
Models package for the application.
"""

from .user import User
from .refresh_token import RefreshToken
from .subscription import Subscription
from .workspace import Workspace
from .task import Task
from .habit import Habit, HabitEntry
from .metric import Metric
from .pomodoro_session import PomodoroSession
from .countdown_timer import CountdownTimer
from .integration import Integration
from .ai_conversation import AIConversation
from .file_upload import FileUpload
from .tab_stash import TabStash
from .sync_data import SyncData
from .webhook_event import WebhookEvent

__all__ = [
    "User",
    "RefreshToken",
    "Subscription",
    "Workspace",
    "Task",
    "Habit",
    "HabitEntry",
    "Metric",
    "PomodoroSession",
    "CountdownTimer",
    "Integration",
    "AIConversation",
    "FileUpload",
    "TabStash",
    "SyncData",
    "WebhookEvent",
]
