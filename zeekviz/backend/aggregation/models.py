"""
aggregation/models.py

Derived view models. None of these are stored; each query builds fresh
instances from the current session's records.

Node / Edge / NetworkGraph — host relationship graph
TimelinePoint / TimelineData — fixed-width activity buckets
ConnStateInfo / Stats — summary roll-up
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

BYTES_SCALE = 1000.0


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------

@dataclass
class Node:
    """One host seen as origin or responder."""

    id: str
    label: str
    connections: int = 0
    total_bytes: int = 0
    is_local: bool = False

    x: float | None = None
    y: float | None = None
    """Layout coordinates. Owned by the front-end; the builder never sets them."""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "connections": self.connections,
            "total_bytes": self.total_bytes,
            "is_local": self.is_local,
        }
        if self.x:
            out["x"] = self.x
        if self.y:
            out["y"] = self.y
        return out


@dataclass
class Edge:
    """Traffic from one host to another over one transport protocol."""

    source: str
    target: str
    protocol: str
    service: str = ""
    """Service of the first record seen on this edge; later records don't change it."""

    count: int = 0
    total_bytes: int = 0
    weight: float = 0.0
    """total_bytes / 1000 — a display scale for line thickness, not a metric."""

    def add(self, total_bytes: int) -> None:
        self.count += 1
        self.total_bytes += total_bytes
        self.weight = self.total_bytes / BYTES_SCALE

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "protocol": self.protocol,
            "service": self.service,
            "count": self.count,
            "total_bytes": self.total_bytes,
            "weight": self.weight,
        }


@dataclass
class NetworkGraph:
    """Nodes and edges in no particular order."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

@dataclass
class TimelinePoint:
    timestamp: int
    """Bucket start, whole Unix seconds."""

    count: int = 0
    bytes: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "count": self.count, "bytes": self.bytes}


@dataclass
class TimelineData:
    points: list[TimelinePoint] = field(default_factory=list)
    start: int = 0
    end: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "start": self.start,
            "end": self.end,
        }


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

@dataclass
class ConnStateInfo:
    code: str
    description: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "description": self.description, "count": self.count}


@dataclass
class Stats:
    total_connections: int = 0
    protocols: dict[str, int] = field(default_factory=dict)
    services: dict[str, int] = field(default_factory=dict)
    conn_states: dict[str, int] = field(default_factory=dict)
    unique_ips: set[str] = field(default_factory=set)
    total_bytes: int = 0

    start: float = -1
    end: float = -1
    """Min / max record timestamp, untruncated. -1 when there are no records."""

    available_conn_states: list[ConnStateInfo] = field(default_factory=list)
    """conn_states with descriptions, most frequent first."""

    @property
    def unique_ip_count(self) -> int:
        return len(self.unique_ips)

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_connections": self.total_connections,
            "protocols": dict(self.protocols),
            "services": dict(self.services),
            "conn_states": dict(self.conn_states),
            "total_bytes": self.total_bytes,
            "unique_ip_count": self.unique_ip_count,
            "time_range": {
                "start": self.start,
                "end": self.end,
                "duration": self.duration,
            },
            "available_conn_states": [s.to_dict() for s in self.available_conn_states],
        }
