# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from mtconnect_dataitem.cli import main as cli_main
from mtconnect_dataitem.cli.main import _build_message, _pretty_print, build_parser
from mtconnect_dataitem.config import HttpSettings
from mtconnect_dataitem.http.adapters import StubHttpClient
from mtconnect_dataitem.http.models import HttpResponse
from mtconnect_dataitem.nodes.base import CollectingHost
from mtconnect_dataitem.nodes.reader import ReaderConfig
from mtconnect_dataitem.runtime import DataItemRuntime

STREAMS = '<MTConnectStreams><Execution dataItemId="exec" sequence="3">ACTIVE</Execution></MTConnectStreams>'


class ClosingStubHttpClient(StubHttpClient):
    def __init__(self, responses=None):
        super().__init__(responses)
        self.closed = False

    def close(self) -> None:
        self.closed = True


def test_runtime_shares_cache_across_reader_nodes_and_closes():
    client = ClosingStubHttpClient(
        {
            "http://agent:5000/api/v6/mtc/current": HttpResponse(ok=True, status_code=404),
            "http://agent:5000/current": HttpResponse(ok=True, status_code=200, text=STREAMS),
        }
    )
    with DataItemRuntime(http_client=client, settings=HttpSettings()) as runtime:
        first = runtime.read({"host": "agent", "dataItemId": "exec"})
        second = runtime.read({}, ReaderConfig(host="agent", data_item_id="exec"))
        assert first.last_message["payload"] == "ACTIVE"
        assert second.last_message["sequence"] == "3"
        assert len(runtime.broker_cache) == 1

    probes = [r for r in client.requests if r.url.endswith("/api/v6/mtc/current")]
    assert len(probes) == 1
    assert client.closed is True


def test_runtime_write_does_not_mutate_input():
    client = StubHttpClient({"http://engine:7200/api/v6/agent/data": HttpResponse(ok=True, status_code=200, text="")})
    runtime = DataItemRuntime(http_client=client, settings=HttpSettings())
    msg = {"host": "engine", "dataItemId": "x", "payload": 5}
    host = runtime.write(msg)
    assert host.last_message["payload"]["success"] is True
    assert msg == {"host": "engine", "dataItemId": "x", "payload": 5}


def test_build_parser_and_message():
    parser = build_parser()
    args = parser.parse_args(["--json", "get", "https://agent", "exec", "--path", "/mill", "--port", "5001"])
    assert args.json is True
    assert _build_message(args) == {"host": "https://agent", "dataItemId": "exec", "port": "5001", "path": "/mill"}

    args = parser.parse_args(["set", "engine", "Line.Count", "42", "--json-value"])
    assert _build_message(args) == {"host": "engine", "dataItemId": "Line.Count", "value": 42}

    args = parser.parse_args(["set", "engine", "Line.Count", "42"])
    assert _build_message(args)["value"] == "42"


def test_pretty_print_read_and_write(capsys):
    host = CollectingHost()
    host.send({"dataItemId": "exec", "name": "exec", "payload": "ACTIVE", "timestamp": "T", "sequence": "3"})
    _pretty_print("get", host)
    output = capsys.readouterr().out
    assert "exec" in output
    assert "ACTIVE" in output
    assert "Timestamp: T" in output

    host = CollectingHost()
    host.send({"payload": {"success": False, "dataItemId": "x", "value": 1, "statusCode": 500, "error": "boom"}})
    _pretty_print("set", host)
    assert "Failed to set x (HTTP 500): boom" in capsys.readouterr().out

    host = CollectingHost()
    host.error("No host specified")
    _pretty_print("get", host)
    assert "No host specified" in capsys.readouterr().out


def test_main_runs_read_with_injected_client(monkeypatch, capsys):
    client = StubHttpClient(
        {
            "http://agent:5000/api/v6/mtc/current": HttpResponse(ok=True, status_code=200, text=STREAMS),
        }
    )
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings: client)
    exit_code = cli_main.main(["--json", "get", "agent", "exec"])
    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["payload"] == "ACTIVE"
    assert output["name"] == "exec"


def test_main_returns_error_code_on_failure(monkeypatch, capsys):
    client = StubHttpClient()
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings: client)
    exit_code = cli_main.main(["set", "engine", "x", "1"])
    assert exit_code == 1
    assert "Failed to set x" in capsys.readouterr().out


def test_pretty_print_failures_include_reason(capsys):
    host = CollectingHost()
    host.send({"dataItemId": "exec", "payload": None, "error": "Request timed out", "errorKind": "Timeout"})
    _pretty_print("get", host)
    assert "exec: Request timed out (Timeout) - Request timed out" in capsys.readouterr().out

    host = CollectingHost()
    host.send(
        {
            "payload": {"success": False, "dataItemId": "x", "value": 1, "error": "refused"},
            "errorKind": "NetworkError",
        }
    )
    _pretty_print("set", host)
    output = capsys.readouterr().out
    assert "Failed to set x: refused" in output
    assert "Reason: HTTP request failed" in output


def test_main_rejects_invalid_json_value(monkeypatch, capsys):
    def fail_if_called(settings):  # noqa: ARG001
        raise AssertionError("no client should be created")

    monkeypatch.setattr(cli_main, "create_default_http_client", fail_if_called)
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["set", "engine", "x", "{not json", "--json-value"])
    assert excinfo.value.code == 2
    assert "VALUE is not valid JSON" in capsys.readouterr().err
