"""
tests/test_metrics.py

Tests for metrics.py: counters reported by /health.
"""

from __future__ import annotations

import threading

from zeekviz.backend.metrics import Counter, Metrics


class TestCounter:

    def test_inc(self):
        c = Counter()
        c.inc()
        c.inc(4)
        assert c.value == 5

    def test_parallel_inc(self):
        c = Counter()
        threads = [threading.Thread(target=lambda: [c.inc() for _ in range(1000)]) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert c.value == 8000


class TestMetrics:

    def test_as_dict_names(self):
        assert set(Metrics().as_dict()) == {
            "lines_parsed_ok", "lines_parse_error", "lines_blank",
            "sessions_ingested", "sessions_deleted",
        }

    def test_reset_all(self):
        m = Metrics()
        m.lines_parsed_ok.inc(3)
        m.sessions_deleted.inc()
        m.reset_all()
        assert all(v == 0 for v in m.as_dict().values())
