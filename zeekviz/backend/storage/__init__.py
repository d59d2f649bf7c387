"""storage/__init__.py"""
from .session_store import (
    InvalidOperationError,
    Session,
    SessionNotFoundError,
    SessionStore,
    SessionSummary,
)

__all__ = [
    "SessionStore",
    "Session",
    "SessionSummary",
    "SessionNotFoundError",
    "InvalidOperationError",
]
