# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from mtconnect_dataitem.config import HttpSettings
from mtconnect_dataitem.detection.broker import BrokerClassification, BrokerTypeCache, BrokerTypeResolver
from mtconnect_dataitem.errors import (
    BrokerNetworkError,
    BrokerTimeoutError,
    DataItemNotFoundError,
    DocumentParseError,
    ErrorKind,
)
from mtconnect_dataitem.http.adapters import StubHttpClient
from mtconnect_dataitem.http.models import HttpResponse
from mtconnect_dataitem.nodes.base import CollectingHost, NodeStatus
from mtconnect_dataitem.nodes.reader import DataItemReaderNode, ReaderConfig

SE_CURRENT = "http://broker:5000/api/v6/mtc/current"
GENERIC_CURRENT = "http://broker:5000/current"
STREAMS = (
    "<MTConnectStreams><Streams>"
    '<Temperature dataItemId="EngineInfo.CPUTemp" timestamp="2024-05-01T10:00:00Z" sequence="17">48.2</Temperature>'
    "</Streams></MTConnectStreams>"
)


def _node(client, config=None, cache=None, **kwargs):
    settings = HttpSettings(timeout=9.0, probe_timeout=3.0)
    resolver = BrokerTypeResolver(client, cache if cache is not None else BrokerTypeCache(), settings)
    return DataItemReaderNode(config or ReaderConfig(host="broker", data_item_id="EngineInfo.CPUTemp"), resolver, client, settings=settings, **kwargs)


def test_reads_from_solution_engine():
    client = StubHttpClient({SE_CURRENT: HttpResponse(ok=True, status_code=200, text=STREAMS)})
    host = CollectingHost()
    msg = _node(client).on_input({"topic": "t"}, host)

    assert msg["payload"] == "48.2"
    assert msg["dataItemId"] == "EngineInfo.CPUTemp"
    assert msg["timestamp"] == "2024-05-01T10:00:00Z"
    assert msg["sequence"] == "17"
    assert msg["name"] == "CPUTemp"
    assert msg["topic"] == "t"
    assert host.sent == [msg]
    assert host.completed is True
    assert host.completion_error is None
    assert host.statuses[0] == NodeStatus.busy("requesting...")
    assert host.statuses[-1] == NodeStatus.success("48.2")
    # probe + fetch, both against the Solution Engine path
    assert [r.url for r in client.requests] == [SE_CURRENT, SE_CURRENT]
    assert client.requests[0].timeout == 3.0
    assert client.requests[1].timeout == 9.0


def test_falls_back_to_generic_agent_with_path():
    client = StubHttpClient(
        {
            SE_CURRENT: HttpResponse(ok=True, status_code=404, text="<MTConnectError/>"),
            "http://broker:5000/mill/current": HttpResponse(ok=True, status_code=200, text=STREAMS),
        }
    )
    host = CollectingHost()
    msg = _node(client).on_input({"path": "/mill/"}, host)
    assert msg["payload"] == "48.2"
    assert client.requests[-1].url == "http://broker:5000/mill/current"


def test_message_overrides_config():
    client = StubHttpClient({"https://other:6000/current": HttpResponse(ok=True, status_code=200, text=STREAMS)})
    host = CollectingHost()
    msg = _node(client, config=ReaderConfig(host="broker", path="/cfg", data_item_id="unused")).on_input(
        {"host": "https://other/", "port": 6000, "path": "", "dataItemId": "EngineInfo.CPUTemp"},
        host,
    )
    assert msg["payload"] == "48.2"
    assert client.requests[0].url == "https://other:6000/api/v6/mtc/current"
    assert client.requests[1].url == "https://other:6000/current"


def test_cached_verdict_skips_probe():
    cache = BrokerTypeCache()
    cache.set("broker:5000", BrokerClassification(is_solution_engine=False))
    client = StubHttpClient({GENERIC_CURRENT: HttpResponse(ok=True, status_code=200, text=STREAMS)})
    node = _node(client, cache=cache)
    node.on_input({}, CollectingHost())
    node.on_input({}, CollectingHost())
    assert [r.url for r in client.requests] == [GENERIC_CURRENT, GENERIC_CURRENT]


@pytest.mark.parametrize(
    "msg, config, expected",
    [
        ({}, ReaderConfig(data_item_id="x"), "No host specified"),
        ({"host": "http://"}, ReaderConfig(data_item_id="x"), "No host specified"),
        ({}, ReaderConfig(host="broker"), "No data item ID specified"),
    ],
)
def test_missing_input_reports_error_without_http(msg, config, expected):
    client = StubHttpClient()
    host = CollectingHost()
    assert _node(client, config=config).on_input(msg, host) is None
    assert host.errors == [expected]
    assert host.sent == []
    assert host.completed is True
    assert host.completion_error is None
    assert client.requests == []


def test_not_found_sends_failure_message_and_warns():
    client = StubHttpClient({SE_CURRENT: HttpResponse(ok=True, status_code=200, text=STREAMS)})
    host = CollectingHost()
    msg = _node(client, config=ReaderConfig(host="broker", data_item_id="missing")).on_input({}, host)
    assert msg["payload"] is None
    assert msg["error"] == "Data item 'missing' not found"
    assert msg["errorKind"] == ErrorKind.NOT_FOUND.value
    assert host.warnings == ["Data item 'missing' not found in response"]
    assert host.statuses[-1] == NodeStatus.warning("not found")
    assert host.completion_error is None


def test_http_error_status_sends_failure_message():
    cache = BrokerTypeCache()
    cache.set("broker:5000", BrokerClassification(is_solution_engine=False))
    client = StubHttpClient({GENERIC_CURRENT: HttpResponse(ok=True, status_code=503, text="busy")})
    host = CollectingHost()
    msg = _node(client, cache=cache).on_input({}, host)
    assert msg["payload"] is None
    assert msg["errorKind"] == "HttpError"
    assert msg["statusCode"] == 503
    assert host.errors == ["HTTP 503"]
    assert host.completion_error is None


@pytest.mark.parametrize(
    "kind, error_type, status_text",
    [
        (ErrorKind.TIMEOUT, BrokerTimeoutError, "timeout"),
        (ErrorKind.NETWORK_ERROR, BrokerNetworkError, "error"),
    ],
)
def test_transport_failures_send_failure_and_complete_with_error(kind, error_type, status_text):
    client = StubHttpClient(
        {
            SE_CURRENT: HttpResponse.failure("boom", kind),
            GENERIC_CURRENT: HttpResponse.failure("boom", kind),
        }
    )
    host = CollectingHost()
    msg = _node(client).on_input({}, host)
    assert msg["payload"] is None
    assert msg["errorKind"] == kind.value
    assert isinstance(host.completion_error, error_type)
    assert host.statuses[-1] == NodeStatus.failure(status_text)
    assert len(host.errors) == 1
    # a failed probe still lets the fetch run against the generic URL
    assert [r.url for r in client.requests] == [SE_CURRENT, GENERIC_CURRENT]


def test_finder_exception_maps_to_parse_error():
    class BrokenFinder:
        def find_by_id(self, document, data_item_id):
            raise ValueError("bad document")

    client = StubHttpClient({SE_CURRENT: HttpResponse(ok=True, status_code=200, text=STREAMS)})
    host = CollectingHost()
    msg = _node(client, finder=BrokenFinder()).on_input({}, host)
    assert msg["errorKind"] == "ParseError"
    assert isinstance(host.completion_error, DocumentParseError)
    assert host.errors == ["Failed to parse MTConnect response: bad document"]
    assert host.statuses[-1] == NodeStatus.failure("parse error")


def test_close_clears_status():
    host = CollectingHost()
    _node(StubHttpClient()).close(host)
    assert host.statuses == [NodeStatus.clear()]


def test_truncated_document_without_match_is_parse_error():
    truncated = HttpResponse(
        ok=True,
        status_code=200,
        text=STREAMS[:60],
        content=STREAMS[:60].encode(),
        meta={"body_truncated": True},
    )
    cache = BrokerTypeCache()
    cache.set("broker:5000", BrokerClassification(is_solution_engine=False))
    client = StubHttpClient({GENERIC_CURRENT: truncated})
    host = CollectingHost()
    msg = _node(client, cache=cache).on_input({}, host)

    assert msg["payload"] is None
    assert msg["errorKind"] == ErrorKind.PARSE_ERROR.value
    assert "truncated at 60 bytes" in msg["error"]
    assert isinstance(host.completion_error, DocumentParseError)
    assert host.warnings == []
    assert host.statuses[-1] == NodeStatus.failure("parse error")


def test_truncated_document_with_match_still_reads_value():
    cache = BrokerTypeCache()
    cache.set("broker:5000", BrokerClassification(is_solution_engine=False))
    client = StubHttpClient(
        {GENERIC_CURRENT: HttpResponse(ok=True, status_code=200, text=STREAMS, meta={"body_truncated": True})}
    )
    msg = _node(client, cache=cache).on_input({}, CollectingHost())
    assert msg["payload"] == "48.2"


def test_not_found_message_uses_not_found_kind():
    client = StubHttpClient({SE_CURRENT: HttpResponse(ok=True, status_code=200, text=STREAMS)})
    host = CollectingHost()
    msg = _node(client, config=ReaderConfig(host="broker", data_item_id="gone")).on_input({}, host)
    assert msg["errorKind"] == DataItemNotFoundError.kind.value == "NotFound"
    assert host.completion_error is None
