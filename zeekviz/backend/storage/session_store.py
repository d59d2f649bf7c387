"""
storage/session_store.py

SessionStore — every ingested conn.log, held in memory, plus a pointer to
the one currently being viewed.

Invariants:
  - The store is the only owner of Session objects. Sessions never change
    after ingest; their records are a tuple, so a query can keep the
    reference it was handed without copying.
  - Whenever at least one session exists, current_id names one of them.
  - The last remaining session cannot be deleted.

Session ids are the first 16 hex chars of sha256("<filename>_<unix second>").
Two ingests of the same filename within one second therefore get the same
id; the later one replaces the earlier and a warning is logged.

Thread safety: every read and write of the map and the current pointer
happens under one threading.Lock. Nothing slow (parsing, aggregation)
runs while the lock is held.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from ..ingest.parser import load_file
from ..metrics import METRICS
from ..models import ConnectionRecord

logger = logging.getLogger(__name__)

FILE_ID_LENGTH = 16


class SessionNotFoundError(LookupError):
    """No session with the given id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"File {session_id!r} not found")
        self.session_id = session_id


class InvalidOperationError(ValueError):
    """The request is well-formed but not allowed in the store's current state."""


@dataclass(frozen=True)
class Session:
    id: str
    filename: str
    upload_time: int
    """Whole Unix seconds."""

    size: int = 0
    """Upload size in bytes; 0 when loaded from a local path."""

    records: tuple[ConnectionRecord, ...] = field(default=(), repr=False)

    @property
    def connection_count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class SessionSummary:
    id: str
    filename: str
    upload_time: int
    size: int
    connection_count: int
    is_current: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filename": self.filename,
            "upload_time": self.upload_time,
            "size": self.size,
            "connection_count": self.connection_count,
            "is_current": self.is_current,
        }


def make_session_id(filename: str, upload_time: int) -> str:
    digest = hashlib.sha256(f"{filename}_{upload_time}".encode()).hexdigest()
    return digest[:FILE_ID_LENGTH]


class SessionStore:
    """In-memory registry of ingested logs. Construct once per process."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._current_id: str | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def ingest(
        self,
        filename: str,
        size: int,
        records: Sequence[ConnectionRecord],
    ) -> str:
        """Register a new session, make it current and return its id."""
        upload_time = int(self._clock())
        session_id = make_session_id(filename, upload_time)
        session = Session(
            id=session_id,
            filename=filename,
            upload_time=upload_time,
            size=size,
            records=tuple(records),
        )
        with self._lock:
            if session_id in self._sessions:
                logger.warning(
                    "Session id %s already exists (same filename %r within one second), replacing",
                    session_id, filename,
                )
            self._sessions[session_id] = session
            self._current_id = session_id
            total = len(self._sessions)

        METRICS.sessions_ingested.inc()
        logger.info(
            "Stored file %r as ID %s with %d connections (%d files loaded)",
            filename, session_id, session.connection_count, total,
        )
        return session_id

    def load_path(self, path: str | Path) -> str:
        """Parse a conn.log from disk and ingest it. OSError / UnicodeDecodeError propagate."""
        records = load_file(path)
        return self.ingest(str(path), 0, records)

    def switch_current(self, session_id: str) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._current_id = session_id

        logger.info(
            "Switched to file %r (ID: %s, %d connections)",
            session.filename, session_id, session.connection_count,
        )
        return session

    def delete(self, session_id: str) -> Session:
        """
        Remove a session.

        Raises:
            SessionNotFoundError:  no such id.
            InvalidOperationError: it is the only session left.
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if len(self._sessions) <= 1:
                raise InvalidOperationError("Cannot delete the only remaining file")
            del self._sessions[session_id]
            if self._current_id == session_id:
                self._current_id = next(iter(self._sessions))

        METRICS.sessions_deleted.inc()
        logger.info("Deleted file %r (ID: %s)", session.filename, session_id)
        return session

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> list[SessionSummary]:
        """All sessions, most recently ingested first."""
        with self._lock:
            current = self._current_id
            sessions = list(self._sessions.values())
        summaries = [
            SessionSummary(
                id=s.id,
                filename=s.filename,
                upload_time=s.upload_time,
                size=s.size,
                connection_count=s.connection_count,
                is_current=s.id == current,
            )
            for s in sessions
        ]
        summaries.sort(key=lambda s: s.upload_time, reverse=True)
        return summaries

    def get(self, session_id: str) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def current(self) -> Session | None:
        with self._lock:
            if self._current_id is None:
                return None
            return self._sessions.get(self._current_id)

    @property
    def current_id(self) -> str | None:
        with self._lock:
            return self._current_id

    def current_records(self) -> tuple[ConnectionRecord, ...]:
        """Records of the current session; () when nothing is loaded."""
        session = self.current()
        return session.records if session is not None else ()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
