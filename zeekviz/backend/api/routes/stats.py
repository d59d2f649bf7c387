"""
api/routes/stats.py

GET /api/stats — summary of the current file plus which file that is.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...aggregation import summarize
from ...storage import SessionStore
from ..deps import get_store
from ..serializers import CurrentFileInfo

router = APIRouter(tags=["stats"])


@router.get("/stats")
async def get_stats(store: SessionStore = Depends(get_store)) -> dict:
    """
    Protocol / service / state distributions, byte totals and time range.

    current_file is omitted when nothing has been loaded yet.
    """
    session = store.current()
    records = session.records if session is not None else ()
    body = summarize(records).to_dict()

    if session is not None:
        body["current_file"] = CurrentFileInfo(
            id=session.id,
            filename=session.filename,
            upload_time=session.upload_time,
            size=session.size,
        ).model_dump()
    body["total_files"] = len(store)
    return body
