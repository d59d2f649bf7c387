"""
api/deps.py

FastAPI dependencies. The SessionStore and Settings live on app.state
(set by create_app), so each test can build an app around a fresh store.
"""

from __future__ import annotations

from fastapi import Query, Request

from ..config import Settings
from ..ingest.filter import FilterCriteria
from ..storage import SessionStore


def get_store(request: Request) -> SessionStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("SessionStore not initialised — pass one to create_app()")
    return store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_filter_criteria(
    start:      str | None = Query(None, description="Unix seconds, inclusive"),
    end:        str | None = Query(None, description="Unix seconds, inclusive"),
    protocol:   str | None = Query(None, description="e.g. tcp; 'all' disables"),
    conn_state: str | None = Query(None, description="e.g. SF; 'all' disables"),
) -> FilterCriteria:
    """Raw query strings; unparseable time bounds disable the time filter."""
    return FilterCriteria(start=start, end=end, protocol=protocol, conn_state=conn_state)
