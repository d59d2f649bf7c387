"""
aggregation/graph.py

build_graph() — host relationship graph for the force-directed view.

Nodes are keyed by host string, edges by (origin, responder, protocol),
so the same host pair talking tcp and udp yields two edges. A record
whose origin equals its responder is not special-cased: it produces a
self-loop edge and counts twice towards that host's node.

Output order follows dict insertion order but callers must not rely on it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..ingest.parser import is_local_ip
from ..models import ConnectionRecord
from .models import Edge, NetworkGraph, Node

logger = logging.getLogger(__name__)

EdgeKey = tuple[str, str, str]


def _upsert_node(nodes: dict[str, Node], host: str, total_bytes: int) -> None:
    node = nodes.get(host)
    if node is None:
        node = Node(id=host, label=host, is_local=is_local_ip(host))
        nodes[host] = node
    node.connections += 1
    node.total_bytes += total_bytes


def _upsert_edge(edges: dict[EdgeKey, Edge], record: ConnectionRecord, total_bytes: int) -> None:
    key = (record.orig_host, record.resp_host, record.protocol)
    edge = edges.get(key)
    if edge is None:
        edge = Edge(
            source=record.orig_host,
            target=record.resp_host,
            protocol=record.protocol,
            service=record.service,
        )
        edges[key] = edge
    edge.add(total_bytes)


def build_graph(records: Iterable[ConnectionRecord]) -> NetworkGraph:
    """Single pass over *records*; returns every host and host-pair seen."""
    nodes: dict[str, Node] = {}
    edges: dict[EdgeKey, Edge] = {}

    for record in records:
        total = record.total_bytes
        _upsert_node(nodes, record.orig_host, total)
        _upsert_node(nodes, record.resp_host, total)
        _upsert_edge(edges, record, total)

    logger.debug("Graph built — nodes=%d edges=%d", len(nodes), len(edges))
    return NetworkGraph(nodes=list(nodes.values()), edges=list(edges.values()))
