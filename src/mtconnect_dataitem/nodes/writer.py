# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Node that writes a data item value to a Solution Engine broker."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_WRITE_PORT, HttpSettings, load_http_settings
from ..errors import ErrorKind, MissingInputError, error_for_kind
from ..http.client import HttpClient
from ..http.models import HttpRequest
from ..http.url import Endpoint, build_write_url
from ..models.results import WriteOutcome
from ..mtconnect.values import MissingValue, WriteValue, coerce_value
from ..mtconnect.xml import XML_CONTENT_TYPE, build_data_items_body
from .base import FlowHost, FlowMessage, NodeStatus, override

logger = logging.getLogger(__name__)


@dataclass
class WriterConfig:
    """Static node configuration; message fields override it per request."""

    host: str = ""
    port: int | str = DEFAULT_WRITE_PORT
    data_item_id: str = ""


def parse_response_body(text: str) -> Any:
    """Return the decoded JSON body, or the raw text when it is not JSON."""
    try:
        return json.loads(text)
    except ValueError:
        return text


class DataItemWriterNode:
    """Builds the `<DataItems>` body, POSTs it and maps the HTTP outcome to a result message."""

    def __init__(self, config: WriterConfig, http_client: HttpClient, *, settings: HttpSettings | None = None):
        self.config = config
        self.http_client = http_client
        self.settings = settings or load_http_settings()

    def on_input(self, msg: FlowMessage, host: FlowHost) -> FlowMessage | None:
        """Process one inbound message; returns the forwarded message, if any."""
        try:
            endpoint, data_item_id, raw_value, value = self._resolve_inputs(msg)
        except MissingInputError as exc:
            host.error(exc.message, msg)
            host.done()
            return None

        host.status(NodeStatus.busy("sending..."))
        body = build_data_items_body(data_item_id, value)
        url = build_write_url(endpoint)
        logger.info("POST to %s with body: %s", url, body)

        response = self.http_client.request(
            HttpRequest(
                url=url,
                method="POST",
                headers={"Content-Type": XML_CONTENT_TYPE},
                body=body.encode("utf-8"),
                timeout=self.settings.write_timeout,
            )
        )

        if not response.ok:
            kind = response.error_kind or ErrorKind.NETWORK_ERROR
            if kind is ErrorKind.TIMEOUT:
                text, status_text = "Request timed out", "timeout"
            else:
                text, status_text = f"HTTP request failed: {response.error_message}", "error"
            host.status(NodeStatus.failure(status_text))
            host.error(text, msg)
            outcome = WriteOutcome(
                success=False,
                data_item_id=data_item_id,
                value=raw_value,
                error=response.error_message or text,
            )
            msg["payload"] = outcome.to_dict()
            msg["errorKind"] = kind.value
            host.send(msg)
            host.done(error_for_kind(kind, text))
            return msg

        if response.is_success:
            host.status(NodeStatus.success(f"set {data_item_id}"))
            outcome = WriteOutcome(
                success=True,
                data_item_id=data_item_id,
                value=raw_value,
                status_code=response.status_code,
            )
            msg["payload"] = outcome.to_dict()
            if response.text:
                msg["response"] = parse_response_body(response.text)
            host.send(msg)
            host.done()
            return msg

        host.status(NodeStatus.failure(f"error {response.status_code}"))
        host.error(f"HTTP {response.status_code}: {response.text}", msg)
        outcome = WriteOutcome(
            success=False,
            data_item_id=data_item_id,
            value=raw_value,
            status_code=response.status_code,
            error=response.text,
        )
        msg["payload"] = outcome.to_dict()
        msg["errorKind"] = ErrorKind.HTTP_ERROR.value
        host.send(msg)
        host.done()
        return msg

    def close(self, host: FlowHost) -> None:
        host.status(NodeStatus.clear())

    def _resolve_inputs(self, msg: FlowMessage) -> tuple[Endpoint, str, Any, WriteValue]:
        raw_host = override(msg, "host", self.config.host)
        port = override(msg, "port", self.config.port or DEFAULT_WRITE_PORT)
        data_item_id = override(msg, "dataItemId", self.config.data_item_id)
        raw_value = msg["value"] if "value" in msg else msg.get("payload")

        endpoint = Endpoint.from_host(raw_host, port)
        if not endpoint.hostname:
            raise MissingInputError("No host specified")
        if not data_item_id:
            raise MissingInputError("No data item ID specified")
        value = coerce_value(raw_value)
        if isinstance(value, MissingValue):
            raise MissingInputError("No value specified (use msg.payload or msg.value)")
        return endpoint, str(data_item_id), raw_value, value


__all__ = ["DataItemWriterNode", "WriterConfig", "parse_response_body"]
