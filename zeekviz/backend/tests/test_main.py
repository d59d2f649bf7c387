"""
tests/test_main.py

Tests for main.py: argument parsing, startup preload and exit codes.
uvicorn.run is replaced so no server is started.
"""

from __future__ import annotations

import json

import pytest

from zeekviz.backend import main as main_mod


@pytest.fixture
def conn_log(tmp_path):
    p = tmp_path / "conn.log"
    lines = [
        json.dumps({"ts": 100.0, "id.orig_h": "10.0.0.1", "id.resp_h": "8.8.8.8", "proto": "udp"}),
        json.dumps({"ts": 101.0, "id.orig_h": "10.0.0.1", "id.resp_h": "1.1.1.1", "proto": "tcp"}),
    ]
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


@pytest.fixture
def served(monkeypatch):
    calls = []
    monkeypatch.setattr(main_mod.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    return calls


class TestParseArgs:

    def test_defaults_come_from_settings(self):
        args = main_mod._parse_args([])
        assert args.host == main_mod.settings.API_HOST
        assert args.port == main_mod.settings.API_PORT
        assert args.log_path == main_mod.settings.LOG_PATH

    def test_overrides(self):
        args = main_mod._parse_args(["--host", "127.0.0.1", "--port", "9001", "--log-path", "x.log"])
        assert (args.host, args.port, args.log_path) == ("127.0.0.1", 9001, "x.log")

    def test_bad_log_level_rejected(self):
        with pytest.raises(SystemExit):
            main_mod._parse_args(["--log-level", "LOUD"])


class TestBuildStore:

    def test_without_path_is_empty(self):
        store = main_mod.build_store(None)
        assert len(store) == 0
        assert store.current_id is None

    def test_preloads_path(self, conn_log):
        store = main_mod.build_store(str(conn_log))
        assert len(store) == 1
        session = store.current()
        assert session.filename == str(conn_log)
        assert session.size == 0
        assert session.connection_count == 2

    def test_oversized_number_does_not_abort_preload(self, tmp_path):
        p = tmp_path / "big.log"
        p.write_text(json.dumps({"ts": 1.0, "duration": 10**400}) + "\n", encoding="utf-8")
        store = main_mod.build_store(str(p))
        assert store.current().connection_count == 1

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(OSError):
            main_mod.build_store(str(tmp_path / "missing.log"))


class TestMain:

    def test_unreadable_log_exits_1(self, tmp_path, served):
        with pytest.raises(SystemExit) as exc:
            main_mod.main(["--log-path", str(tmp_path / "missing.log")])
        assert exc.value.code == 1
        assert served == []

    def test_serves_preloaded_store(self, conn_log, served):
        with pytest.raises(SystemExit) as exc:
            main_mod.main(["--log-path", str(conn_log), "--host", "127.0.0.1", "--port", "9002"])
        assert exc.value.code == 0
        app, kw = served[0]
        assert kw["host"] == "127.0.0.1"
        assert kw["port"] == 9002
        assert len(app.state.store) == 1

    def test_serves_empty_store(self, served):
        with pytest.raises(SystemExit) as exc:
            main_mod.main(["--port", "9003"])
        assert exc.value.code == 0
        assert len(served[0][0].state.store) == 0
