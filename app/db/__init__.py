"""
Database package public API.

Keeps `from app.db import get_db, Base, engine` imports consistent.
"""

from .session import (
    ACTOR_KEY,
    engine,
    AsyncSessionLocal,
    Base,
    get_db,
    init_db,
    close_db,
)

__all__ = [
    "ACTOR_KEY",
    "engine",
    "AsyncSessionLocal",
    "Base",
    "get_db",
    "init_db",
    "close_db",
]
