"""
api/routes/timeline.py

GET /api/timeline — connection counts and bytes per fixed-width bucket.

Always covers the whole current file; filters are not applied here so
the brush control can show the full extent of the log.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ...aggregation import build_timeline
from ...config import Settings
from ...storage import SessionStore
from ..deps import get_settings, get_store

router = APIRouter(tags=["timeline"])


@router.get("/timeline")
async def get_timeline(
    store: SessionStore = Depends(get_store),
    cfg: Settings = Depends(get_settings),
) -> dict:
    timeline = build_timeline(store.current_records(), cfg.TIMELINE_BUCKET_SECONDS)
    return timeline.to_dict()
