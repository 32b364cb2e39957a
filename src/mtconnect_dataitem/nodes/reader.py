# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Node that reads one data item's current value from an MTConnect broker."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import DEFAULT_READ_PORT, HttpSettings, load_http_settings
from ..detection.broker import BrokerTypeResolver
from ..errors import (
    DataItemError,
    DataItemNotFoundError,
    DocumentParseError,
    ErrorKind,
    MissingInputError,
    error_for_kind,
)
from ..http.client import HttpClient
from ..http.models import HttpRequest
from ..http.url import Endpoint, build_current_url
from ..mtconnect.extract import DataItemFinder, RegexDataItemFinder
from .base import FlowHost, FlowMessage, NodeStatus, override

logger = logging.getLogger(__name__)


@dataclass
class ReaderConfig:
    """Static node configuration; message fields override it per request."""

    host: str = ""
    port: int | str = DEFAULT_READ_PORT
    path: str = ""
    data_item_id: str = ""


class DataItemReaderNode:
    """Resolves the broker type, fetches the "current" document and extracts one data item."""

    def __init__(
        self,
        config: ReaderConfig,
        resolver: BrokerTypeResolver,
        http_client: HttpClient,
        *,
        settings: HttpSettings | None = None,
        finder: DataItemFinder | None = None,
    ):
        self.config = config
        self.resolver = resolver
        self.http_client = http_client
        self.settings = settings or load_http_settings()
        self.finder = finder or RegexDataItemFinder()

    def on_input(self, msg: FlowMessage, host: FlowHost) -> FlowMessage | None:
        """Process one inbound message; returns the forwarded message, if any."""
        try:
            endpoint, path, data_item_id = self._resolve_inputs(msg)
        except MissingInputError as exc:
            host.error(exc.message, msg)
            host.done()
            return None

        host.status(NodeStatus.busy("requesting..."))
        is_solution_engine = self.resolver.resolve(endpoint)
        url = build_current_url(endpoint.hostname, endpoint.port, path, is_solution_engine, endpoint.scheme)
        logger.info("Fetching from: %s", url)

        response = self.http_client.request(HttpRequest(url=url, method="GET", timeout=self.settings.timeout))
        if not response.ok:
            kind = response.error_kind or ErrorKind.NETWORK_ERROR
            if kind is ErrorKind.TIMEOUT:
                text, status_text = "Request timed out", "timeout"
            else:
                text, status_text = f"HTTP request failed: {response.error_message}", "error"
            return self._fail(msg, host, error_for_kind(kind, text), data_item_id, status_text=status_text)

        if not response.is_success:
            error = error_for_kind(ErrorKind.HTTP_ERROR, f"HTTP {response.status_code}", status_code=response.status_code)
            return self._fail(msg, host, error, data_item_id, status_text=f"error {response.status_code}", propagate=False)

        try:
            result = self.finder.find_by_id(response.text, data_item_id)
        except Exception as exc:  # noqa: BLE001
            error = DocumentParseError(f"Failed to parse MTConnect response: {exc}")
            return self._fail(msg, host, error, data_item_id, status_text="parse error")

        msg["dataItemId"] = data_item_id
        if not result.found and response.meta.get("body_truncated"):
            error = DocumentParseError(
                f"Failed to parse MTConnect response: document truncated at {len(response.content)} bytes"
                f" before data item '{data_item_id}' was found"
            )
            return self._fail(msg, host, error, data_item_id, status_text="parse error")

        if not result.found:
            missing = DataItemNotFoundError(f"Data item '{data_item_id}' not found")
            host.status(NodeStatus.warning("not found"))
            host.warn(f"{missing.message} in response")
            msg["payload"] = None
            msg["error"] = missing.message
            msg["errorKind"] = missing.kind.value
            host.send(msg)
            host.done()
            return msg

        msg["payload"] = result.value
        msg["timestamp"] = result.timestamp
        msg["sequence"] = result.sequence
        msg["name"] = result.name
        host.status(NodeStatus.success(result.value or ""))
        host.send(msg)
        host.done()
        return msg

    def close(self, host: FlowHost) -> None:
        host.status(NodeStatus.clear())

    def _resolve_inputs(self, msg: FlowMessage) -> tuple[Endpoint, str, str]:
        raw_host = override(msg, "host", self.config.host)
        port = override(msg, "port", self.config.port or DEFAULT_READ_PORT)
        path = msg["path"] if "path" in msg else self.config.path
        data_item_id = override(msg, "dataItemId", self.config.data_item_id)

        endpoint = Endpoint.from_host(raw_host, port)
        if not endpoint.hostname:
            raise MissingInputError("No host specified")
        if not data_item_id:
            raise MissingInputError("No data item ID specified")
        return endpoint, str(path or ""), str(data_item_id)

    def _fail(
        self,
        msg: FlowMessage,
        host: FlowHost,
        error: DataItemError,
        data_item_id: str,
        *,
        status_text: str,
        propagate: bool = True,
    ) -> FlowMessage:
        host.status(NodeStatus.failure(status_text))
        host.error(error.message, msg)
        msg["payload"] = None
        msg["dataItemId"] = data_item_id
        msg["error"] = error.message
        msg["errorKind"] = error.kind.value
        if error.status_code is not None:
            msg["statusCode"] = error.status_code
        host.send(msg)
        host.done(error if propagate else None)
        return msg


__all__ = ["DataItemReaderNode", "ReaderConfig"]
