"""
ingest/filter.py

Query-time filters over a session's records.

Each stage takes the raw query-string value, so the "is this filter
switched on?" decision lives here rather than in the routes:

    start / end   inclusive whole-second bounds; both must parse as
                  integers or the time stage is skipped entirely
    protocol      exact, case-sensitive match; "" / None / "all" = off
    conn_state    same convention as protocol

Stages compose by AND and run in the order time → protocol → state.
A stage with no matches returns [] and later stages see [].

Usage:
    records = apply_filters(store.current_records(),
                            FilterCriteria(protocol="tcp", conn_state="SF"))
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Sequence

from ..models import ConnectionRecord

logger = logging.getLogger(__name__)

ALL = "all"
_INT_RE = re.compile(r"[+-]?[0-9]+")


class FilterCriteria(NamedTuple):
    start: str | None = None
    end: str | None = None
    protocol: str | None = None
    conn_state: str | None = None


def _parse_bound(value: str | None) -> int | None:
    if value is None or not _INT_RE.fullmatch(value):
        return None
    return int(value)


def _is_off(value: str | None) -> bool:
    return value is None or value == "" or value == ALL


def filter_time_range(
    records: Sequence[ConnectionRecord],
    start: str | None,
    end: str | None,
) -> list[ConnectionRecord]:
    lo = _parse_bound(start)
    hi = _parse_bound(end)
    if lo is None or hi is None:
        if start or end:
            logger.debug("Ignoring time filter with bounds %r..%r", start, end)
        return list(records)
    return [r for r in records if lo <= r.whole_seconds <= hi]


def filter_protocol(
    records: Sequence[ConnectionRecord],
    protocol: str | None,
) -> list[ConnectionRecord]:
    if _is_off(protocol):
        return list(records)
    return [r for r in records if r.protocol == protocol]


def filter_conn_state(
    records: Sequence[ConnectionRecord],
    conn_state: str | None,
) -> list[ConnectionRecord]:
    if _is_off(conn_state):
        return list(records)
    return [r for r in records if r.conn_state == conn_state]


def apply_filters(
    records: Sequence[ConnectionRecord],
    criteria: FilterCriteria,
) -> list[ConnectionRecord]:
    """Run all three stages in sequence and return the surviving records."""
    out = filter_time_range(records, criteria.start, criteria.end)
    out = filter_protocol(out, criteria.protocol)
    out = filter_conn_state(out, criteria.conn_state)
    logger.debug("Filters %s kept %d of %d records", criteria, len(out), len(records))
    return out
