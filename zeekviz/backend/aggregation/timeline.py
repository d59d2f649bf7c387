"""
aggregation/timeline.py

build_timeline() — buckets records into fixed-width windows of log time.

Design:
  - Timestamps are truncated to whole seconds before anything else.
  - Bucket start = floor(ts / width) * width (width defaults to 10 s).
  - start / end come from the records themselves (min / max whole
    second), not from the bucket boundaries.
  - Points are returned sorted by bucket start; empty buckets are not
    emitted.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..models import ConnectionRecord
from .models import TimelineData, TimelinePoint

logger = logging.getLogger(__name__)

DEFAULT_BUCKET_SECONDS = 10


def bucket_start(ts: int, width: int = DEFAULT_BUCKET_SECONDS) -> int:
    return (ts // width) * width


def build_timeline(
    records: Sequence[ConnectionRecord],
    bucket_seconds: int = DEFAULT_BUCKET_SECONDS,
) -> TimelineData:
    """
    Aggregate *records* into timeline points.

    Args:
        records:        Records in any order.
        bucket_seconds: Bucket width in seconds (must be positive).

    Returns:
        TimelineData; empty points with start = end = 0 when records is empty.
    """
    if bucket_seconds <= 0:
        raise ValueError(f"bucket_seconds must be positive — got {bucket_seconds}")
    if not records:
        return TimelineData()

    seconds = [r.whole_seconds for r in records]
    buckets: dict[int, TimelinePoint] = {}

    for ts, record in zip(seconds, records):
        key = bucket_start(ts, bucket_seconds)
        point = buckets.get(key)
        if point is None:
            point = buckets[key] = TimelinePoint(timestamp=key)
        point.count += 1
        point.bytes += record.total_bytes

    points = sorted(buckets.values(), key=lambda p: p.timestamp)
    logger.debug(
        "Timeline built — records=%d buckets=%d width=%ds",
        len(records), len(points), bucket_seconds,
    )
    return TimelineData(points=points, start=min(seconds), end=max(seconds))
