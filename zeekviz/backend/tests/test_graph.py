"""
tests/test_graph.py

Tests for aggregation/graph.py — host graph construction.
"""

from __future__ import annotations

import pytest

from zeekviz.backend.aggregation.graph import build_graph
from zeekviz.backend.models import ConnectionRecord


def conn(
    orig="A",
    resp="B",
    proto="tcp",
    service="",
    orig_bytes=0,
    resp_bytes=0,
    ts=100.0,
) -> ConnectionRecord:
    return ConnectionRecord(
        timestamp=ts,
        orig_host=orig,
        resp_host=resp,
        protocol=proto,
        service=service,
        orig_bytes=orig_bytes,
        resp_bytes=resp_bytes,
        conn_state="SF",
    )


def node(graph, host):
    return next(n for n in graph.nodes if n.id == host)


class TestGraphBasic:

    def test_empty_records_empty_graph(self):
        g = build_graph([])
        assert g.nodes == []
        assert g.edges == []

    def test_two_records_same_pair(self):
        g = build_graph([
            conn(ts=100, orig_bytes=10),
            conn(ts=105, orig_bytes=5),
        ])
        assert {n.id for n in g.nodes} == {"A", "B"}
        for host in ("A", "B"):
            assert node(g, host).connections == 2
            assert node(g, host).total_bytes == 15
        assert len(g.edges) == 1
        edge = g.edges[0]
        assert (edge.source, edge.target, edge.protocol) == ("A", "B", "tcp")
        assert edge.count == 2
        assert edge.total_bytes == 15
        assert edge.weight == pytest.approx(0.015)

    def test_node_label_is_host(self):
        g = build_graph([conn(orig="10.1.1.1", resp="8.8.8.8")])
        n = node(g, "10.1.1.1")
        assert n.label == "10.1.1.1"

    def test_locality_classified(self):
        g = build_graph([conn(orig="192.168.1.5", resp="93.184.216.34")])
        assert node(g, "192.168.1.5").is_local is True
        assert node(g, "93.184.216.34").is_local is False

    def test_layout_coordinates_never_set(self):
        g = build_graph([conn()])
        assert all(n.x is None and n.y is None for n in g.nodes)
        assert "x" not in g.nodes[0].to_dict()


class TestGraphEdges:

    def test_protocol_is_part_of_edge_identity(self):
        g = build_graph([conn(proto="tcp"), conn(proto="udp")])
        assert len(g.edges) == 2
        assert {e.protocol for e in g.edges} == {"tcp", "udp"}

    def test_direction_is_part_of_edge_identity(self):
        g = build_graph([conn(orig="A", resp="B"), conn(orig="B", resp="A")])
        assert len(g.edges) == 2

    def test_first_seen_service_kept(self):
        g = build_graph([
            conn(service=""),
            conn(service="http"),
            conn(service="ssl"),
        ])
        assert len(g.edges) == 1
        assert g.edges[0].service == ""
        assert g.edges[0].count == 3

    def test_weight_tracks_total_bytes(self):
        g = build_graph([conn(orig_bytes=1500, resp_bytes=500), conn(resp_bytes=3000)])
        assert g.edges[0].total_bytes == 5000
        assert g.edges[0].weight == pytest.approx(5.0)

    def test_self_pair_is_a_normal_edge(self):
        g = build_graph([conn(orig="A", resp="A", orig_bytes=7)])
        assert len(g.nodes) == 1
        assert node(g, "A").connections == 2
        assert node(g, "A").total_bytes == 14
        assert len(g.edges) == 1
        assert g.edges[0].source == g.edges[0].target == "A"


class TestGraphSerialisation:

    def test_to_dict_shape(self):
        d = build_graph([conn(service="dns", orig_bytes=10)]).to_dict()
        assert set(d) == {"nodes", "edges"}
        assert set(d["nodes"][0]) == {"id", "label", "connections", "total_bytes", "is_local"}
        assert d["edges"][0] == {
            "source": "A",
            "target": "B",
            "protocol": "tcp",
            "service": "dns",
            "count": 1,
            "total_bytes": 10,
            "weight": 0.01,
        }

    def test_idempotent(self):
        records = [conn(orig=f"h{i % 3}", resp=f"h{i % 5}", orig_bytes=i) for i in range(40)]
        assert build_graph(records).to_dict() == build_graph(records).to_dict()
