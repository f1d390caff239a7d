"""
Database package: declarative base, async engine and session dependency.
"""

from .base import Base
from .connection import AsyncSessionLocal, engine, get_db, init_models

__all__ = [
    "Base",
    "AsyncSessionLocal",
    "engine",
    "get_db",
    "init_models",
]
