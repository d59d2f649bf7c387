"""
aggregation/stats.py

summarize() — one-pass roll-up for the stats panel.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..models import ConnectionRecord
from .models import ConnStateInfo, Stats

CONN_STATE_DESCRIPTIONS: dict[str, str] = {
    "SF":     "Normal Established - Successful connection that was properly closed",
    "S0":     "Connection Attempt Rejected - Initial SYN was not acknowledged",
    "S1":     "Connection Established, Not Terminated - Connection established but not cleanly closed",
    "S2":     "Connection Established, Originator Aborted - Connection established but originator aborted",
    "S3":     "Connection Established, Responder Aborted - Connection established but responder aborted",
    "REJ":    "Connection Rejected - Connection attempt was explicitly rejected",
    "RSTO":   "Connection Reset by Originator - Originator sent RST",
    "RSTR":   "Connection Reset by Responder - Responder sent RST",
    "RSTOS0": "Originator Sent SYN+RST - Connection attempt with immediate reset",
    "RSTRH":  "Responder Sent RST after Handshake - Reset after successful handshake",
    "SH":     "Originator Sent SYN+FIN - Unusual SYN+FIN combination",
    "SHR":    "Responder Sent SYN+FIN after SYN - Response with SYN+FIN",
    "OTH":    "Other/No Further Info - No additional information available",
}


def describe_conn_state(code: str) -> str:
    return CONN_STATE_DESCRIPTIONS.get(code, f"{code} - Unknown connection state")


def describe_conn_states(conn_states: dict[str, int]) -> list[ConnStateInfo]:
    """State table, most frequent first. Order among equal counts is unspecified."""
    table = [
        ConnStateInfo(code=code, description=describe_conn_state(code), count=count)
        for code, count in conn_states.items()
    ]
    table.sort(key=lambda s: s.count, reverse=True)
    return table


def summarize(records: Iterable[ConnectionRecord]) -> Stats:
    protocols: Counter[str] = Counter()
    services: Counter[str] = Counter()
    conn_states: Counter[str] = Counter()
    hosts: set[str] = set()
    total = 0
    total_bytes = 0
    start: float = -1
    end: float = -1

    for r in records:
        total += 1
        protocols[r.protocol] += 1
        if r.service:
            services[r.service] += 1
        conn_states[r.conn_state] += 1
        hosts.add(r.orig_host)
        hosts.add(r.resp_host)
        total_bytes += r.total_bytes
        if start == -1 or r.timestamp < start:
            start = r.timestamp
        if end == -1 or r.timestamp > end:
            end = r.timestamp

    return Stats(
        total_connections=total,
        protocols=dict(protocols),
        services=dict(services),
        conn_states=dict(conn_states),
        unique_ips=hosts,
        total_bytes=total_bytes,
        start=start,
        end=end,
        available_conn_states=describe_conn_states(dict(conn_states)),
    )
