"""
backend/metrics.py

Thread-safe counters for log ingestion and the session store, exposed
through /health.

Usage:
    from zeekviz.backend.metrics import METRICS
    METRICS.lines_parsed_ok.inc()
    METRICS.as_dict()
"""

import threading


class Counter:
    """Monotonic integer guarded by its own lock."""

    __slots__ = ("_value", "_lock")

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def _zero(self) -> None:
        with self._lock:
            self._value = 0


class Metrics:
    """Every ingestion counter, keyed by the name reported in /health."""

    def __init__(self) -> None:
        # Parser
        self.lines_parsed_ok = Counter()      # produced a ConnectionRecord
        self.lines_parse_error = Counter()    # not a JSON object
        self.lines_blank = Counter()          # skipped silently

        # Session store
        self.sessions_ingested = Counter()
        self.sessions_deleted = Counter()

    def as_dict(self) -> dict:
        return {name: c.value for name, c in vars(self).items()}

    def reset_all(self) -> None:
        """Zero every counter. Tests use this between cases."""
        for c in vars(self).values():
            c._zero()


METRICS = Metrics()
