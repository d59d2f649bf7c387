"""
api/routes/connections.py

GET /api/connections — raw records of the current file, filtered.

Query params (all optional, all raw strings):
  start, end   inclusive Unix-second bounds; both required to take effect
  protocol     exact match, "all" = no filter
  conn_state   exact match, "all" = no filter
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...ingest.filter import FilterCriteria, apply_filters
from ...storage import SessionStore
from ..deps import get_filter_criteria, get_store

router = APIRouter(tags=["connections"])


@router.get("/connections")
async def get_connections(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    store: SessionStore = Depends(get_store),
) -> list[dict]:
    """Return matching records in log order, with conn.log key names."""
    records = apply_filters(store.current_records(), criteria)
    return [r.to_dict() for r in records]
