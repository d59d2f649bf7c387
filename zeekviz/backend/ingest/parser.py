"""
ingest/parser.py

Converts lines of a Zeek JSON conn.log into typed ConnectionRecord objects.

Design principles:
  - Tolerance is per field, not per record. Each known key is extracted
    on its own and falls back to the field's zero value when it is
    missing or has the wrong JSON type ("80" where 80 was expected).
  - Unknown keys are ignored.
  - Only a line that is not a JSON object at all is rejected; the loader
    logs it and moves on, so one bad line never aborts an ingestion.
  - Blank lines are skipped silently and are not counted as failures.

Type rules (mirroring what a JSON decoder hands back):
  str   fields accept only JSON strings
  int   fields accept JSON numbers (floats are truncated toward zero)
  float fields accept JSON numbers
  bool  fields accept only JSON true / false
  Booleans are never accepted as numbers.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable

from ..metrics import METRICS
from ..models import ConnectionRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Decode schema: wire key → (attribute, kind)
# ---------------------------------------------------------------------------
_SCHEMA: dict[str, tuple[str, type]] = {
    "ts":            ("timestamp",     float),
    "uid":           ("uid",           str),
    "id.orig_h":     ("orig_host",     str),
    "id.orig_p":     ("orig_port",     int),
    "id.resp_h":     ("resp_host",     str),
    "id.resp_p":     ("resp_port",     int),
    "proto":         ("protocol",      str),
    "service":       ("service",       str),
    "duration":      ("duration",      float),
    "orig_bytes":    ("orig_bytes",    int),
    "resp_bytes":    ("resp_bytes",    int),
    "conn_state":    ("conn_state",    str),
    "local_orig":    ("local_orig",    bool),
    "local_resp":    ("local_resp",    bool),
    "missed_bytes":  ("missed_bytes",  int),
    "history":       ("history",       str),
    "orig_pkts":     ("orig_packets",  int),
    "orig_ip_bytes": ("orig_ip_bytes", int),
    "resp_pkts":     ("resp_packets",  int),
    "resp_ip_bytes": ("resp_ip_bytes", int),
    "ip_proto":      ("ip_proto",      int),
}

_LOCAL_PREFIXES: tuple[str, ...] = (
    "192.168.",
    "10.",
    *(f"172.{octet}." for octet in range(16, 32)),
    "127.",
    "fe80::",
)
_LOCAL_LITERALS = frozenset({"::1"})


def _reject_constant(name: str) -> Any:
    # json accepts NaN / Infinity by default; conn.log never contains them
    raise ValueError(f"non-finite JSON constant {name!r}")


def _coerce(value: Any, kind: type) -> Any:
    """Return *value* converted to *kind*, or None if the JSON type does not fit."""
    if kind is str:
        return value if isinstance(value, str) else None
    if kind is bool:
        return value if isinstance(value, bool) else None
    # numeric kinds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None   # 1e400 decodes to inf
    try:
        return int(value) if kind is int else float(value)
    except OverflowError:
        return None   # integer literal too large for a float


def decode_record(raw: dict[str, Any]) -> ConnectionRecord:
    """
    Build a ConnectionRecord from an already-decoded JSON object.

    This is the only place that knows about absent or mistyped fields.
    """
    fields: dict[str, Any] = {}
    for key, (attr, kind) in _SCHEMA.items():
        if key not in raw:
            continue
        value = _coerce(raw[key], kind)
        if value is not None:
            fields[attr] = value
    return ConnectionRecord(**fields)


def parse_line(line: str | bytes) -> ConnectionRecord | None:
    """
    Parse one conn.log line.

    Returns:
        ConnectionRecord on success, None if the line is not a JSON object.
    """
    try:
        raw = json.loads(line, parse_constant=_reject_constant)
    except ValueError:
        return None
    if not isinstance(raw, dict):
        return None
    return decode_record(raw)


def load_records(lines: Iterable[str]) -> list[ConnectionRecord]:
    """
    Parse every line of a log, in input order.

    Malformed lines are logged and skipped; blank lines are skipped silently.
    """
    records: list[ConnectionRecord] = []
    skipped = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            METRICS.lines_blank.inc()
            continue
        record = parse_line(line)
        if record is None:
            skipped += 1
            METRICS.lines_parse_error.inc()
            logger.warning("Failed to parse connection on line %d: %.80r", lineno, line)
            continue
        records.append(record)

    METRICS.lines_parsed_ok.inc(len(records))
    logger.info("Parsed %d connections (%d lines skipped)", len(records), skipped)
    return records


def load_file(path: str | Path) -> list[ConnectionRecord]:
    """Read a conn.log from the local filesystem. OSError / UnicodeDecodeError propagate."""
    with open(path, encoding="utf-8") as fh:
        return load_records(fh)


def is_local_ip(host: str) -> bool:
    """
    True for conventionally private / loopback / link-local addresses.

    A literal prefix test on the address string, not a CIDR check, so that
    host strings which are not valid IPs are classified without raising.
    """
    if not host:
        return False
    return host in _LOCAL_LITERALS or host.startswith(_LOCAL_PREFIXES)
