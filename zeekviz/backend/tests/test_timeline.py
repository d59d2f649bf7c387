"""
tests/test_timeline.py

Tests for aggregation/timeline.py — fixed-width bucketing of log time.
"""

from __future__ import annotations

import pytest

from zeekviz.backend.aggregation.timeline import bucket_start, build_timeline
from zeekviz.backend.models import ConnectionRecord


def conn(ts: float, orig_bytes: int = 0, resp_bytes: int = 0) -> ConnectionRecord:
    return ConnectionRecord(
        timestamp=ts,
        orig_host="A",
        resp_host="B",
        protocol="tcp",
        orig_bytes=orig_bytes,
        resp_bytes=resp_bytes,
        conn_state="SF",
    )


class TestBucketStart:

    @pytest.mark.parametrize("ts,expected", [
        (100, 100),
        (105, 100),
        (109, 100),
        (110, 110),
        (0, 0),
    ])
    def test_ten_second_buckets(self, ts, expected):
        assert bucket_start(ts) == expected

    def test_custom_width(self):
        assert bucket_start(125, 60) == 120


class TestBuildTimeline:

    def test_empty(self):
        t = build_timeline([])
        assert t.points == []
        assert (t.start, t.end) == (0, 0)

    def test_two_records_one_bucket(self):
        t = build_timeline([conn(100, 10), conn(105, 5)])
        assert [p.to_dict() for p in t.points] == [{"timestamp": 100, "count": 2, "bytes": 15}]
        assert t.start == 100
        assert t.end == 105

    def test_points_sorted_even_if_input_is_not(self):
        t = build_timeline([conn(131), conn(100), conn(119.5), conn(101)])
        assert [p.timestamp for p in t.points] == [100, 110, 130]
        assert [p.count for p in t.points] == [2, 1, 1]

    def test_start_end_are_truncated_record_extremes(self):
        t = build_timeline([conn(107.9), conn(143.2)])
        assert t.start == 107
        assert t.end == 143

    def test_empty_buckets_not_emitted(self):
        t = build_timeline([conn(100), conn(500)])
        assert len(t.points) == 2

    def test_bytes_use_both_directions(self):
        t = build_timeline([conn(100, orig_bytes=3, resp_bytes=4)])
        assert t.points[0].bytes == 7

    def test_custom_bucket_width(self):
        t = build_timeline([conn(100), conn(159), conn(160)], bucket_seconds=60)
        assert [(p.timestamp, p.count) for p in t.points] == [(60, 1), (120, 2)]

    def test_non_positive_width_rejected(self):
        with pytest.raises(ValueError):
            build_timeline([conn(100)], bucket_seconds=0)

    def test_to_dict(self):
        d = build_timeline([conn(100, 1)]).to_dict()
        assert d == {"points": [{"timestamp": 100, "count": 1, "bytes": 1}], "start": 100, "end": 100}

    def test_idempotent(self):
        records = [conn(1_700_000_000 + i * 3.3, i) for i in range(50)]
        assert build_timeline(records).to_dict() == build_timeline(records).to_dict()
