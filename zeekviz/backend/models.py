"""
backend/models.py

ConnectionRecord — one line of a Zeek conn.log, decoded.

Every field has a zero-value default so a record can be built from any
subset of the log's keys. Wire (JSON) names are kept in WIRE_FIELDS and
are the only names clients ever see.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# (wire key, attribute, always emitted)
WIRE_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("ts",            "timestamp",     True),
    ("uid",           "uid",           True),
    ("id.orig_h",     "orig_host",     True),
    ("id.orig_p",     "orig_port",     True),
    ("id.resp_h",     "resp_host",     True),
    ("id.resp_p",     "resp_port",     True),
    ("proto",         "protocol",      True),
    ("service",       "service",       False),
    ("duration",      "duration",      False),
    ("orig_bytes",    "orig_bytes",    False),
    ("resp_bytes",    "resp_bytes",    False),
    ("conn_state",    "conn_state",    True),
    ("local_orig",    "local_orig",    False),
    ("local_resp",    "local_resp",    False),
    ("missed_bytes",  "missed_bytes",  False),
    ("history",       "history",       False),
    ("orig_pkts",     "orig_packets",  False),
    ("orig_ip_bytes", "orig_ip_bytes", False),
    ("resp_pkts",     "resp_packets",  False),
    ("resp_ip_bytes", "resp_ip_bytes", False),
    ("ip_proto",      "ip_proto",      False),
)


@dataclass(frozen=True, slots=True)
class ConnectionRecord:
    """A single summarised flow between two hosts."""

    timestamp: float = 0.0
    """Unix epoch timestamp of the first packet (fractional seconds)."""

    uid: str = ""
    """Zeek's unique connection id, e.g. 'CHhAvVGS1DHFjwGM9'."""

    orig_host: str = ""
    orig_port: int = 0
    resp_host: str = ""
    resp_port: int = 0

    protocol: str = ""
    """Transport protocol as logged: 'tcp' | 'udp' | 'icmp'."""

    service: str = ""
    """Application protocol detected by Zeek ('dns', 'http', ...). Often empty."""

    duration: float = 0.0
    orig_bytes: int = 0
    resp_bytes: int = 0

    conn_state: str = ""
    """Zeek connection state code: 'SF', 'S0', 'REJ', 'RSTO', ..."""

    local_orig: bool = False
    local_resp: bool = False
    missed_bytes: int = 0
    history: str = ""
    orig_packets: int = 0
    orig_ip_bytes: int = 0
    resp_packets: int = 0
    resp_ip_bytes: int = 0
    ip_proto: int = 0

    @property
    def total_bytes(self) -> int:
        return self.orig_bytes + self.resp_bytes

    @property
    def whole_seconds(self) -> int:
        """Timestamp truncated to whole seconds (toward zero)."""
        return int(self.timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Serialise with conn.log key names; zero-valued optional fields are omitted."""
        out: dict[str, Any] = {}
        for key, attr, always in WIRE_FIELDS:
            value = getattr(self, attr)
            if always or value:
                out[key] = value
        return out
