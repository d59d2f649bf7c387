"""
api/routes/graph.py

GET /api/nodes  — node + edge snapshot for the force-directed host graph.
GET /api/graph  — same payload.

Accepts the same filters as /api/connections.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ...aggregation import build_graph
from ...ingest.filter import FilterCriteria, apply_filters
from ...storage import SessionStore
from ..deps import get_filter_criteria, get_store

router = APIRouter(tags=["graph"])


@router.get("/nodes")
@router.get("/graph")
async def get_graph(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    store: SessionStore = Depends(get_store),
) -> dict:
    """Return hosts and host pairs of the current file. Order is not meaningful."""
    records = apply_filters(store.current_records(), criteria)
    return build_graph(records).to_dict()
