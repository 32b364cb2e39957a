# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring a shared HTTP client and broker cache into nodes."""

from __future__ import annotations

from contextlib import suppress
from typing import Any

from .config import HttpSettings, load_http_settings
from .detection.broker import BrokerTypeCache, BrokerTypeResolver
from .http.client import HttpClient, create_default_http_client
from .nodes.base import CollectingHost, FlowMessage
from .nodes.reader import DataItemReaderNode, ReaderConfig
from .nodes.writer import DataItemWriterNode, WriterConfig


class DataItemRuntime:
    """
    Owns the process-wide collaborators of the broker nodes.

    Every reader node created here shares one `BrokerTypeCache`, so a broker is
    probed at most once per runtime rather than once per node.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: HttpSettings | None = None,
        cache: BrokerTypeCache | None = None,
    ):
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.broker_cache = cache if cache is not None else BrokerTypeCache()
        self.resolver = BrokerTypeResolver(self.http_client, self.broker_cache, self.http_settings)

    def reader(self, config: ReaderConfig | None = None) -> DataItemReaderNode:
        return DataItemReaderNode(config or ReaderConfig(), self.resolver, self.http_client, settings=self.http_settings)

    def writer(self, config: WriterConfig | None = None) -> DataItemWriterNode:
        return DataItemWriterNode(config or WriterConfig(), self.http_client, settings=self.http_settings)

    def read(self, msg: FlowMessage, config: ReaderConfig | None = None) -> CollectingHost:
        """Run one message through a reader node and return what it reported."""
        host = CollectingHost()
        self.reader(config).on_input(dict(msg), host)
        return host

    def write(self, msg: FlowMessage, config: WriterConfig | None = None) -> CollectingHost:
        """Run one message through a writer node and return what it reported."""
        host = CollectingHost()
        self.writer(config).on_input(dict(msg), host)
        return host

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> DataItemRuntime:
        return self

    def __exit__(self, _exc_type: Any, _exc: Any, _tb: Any) -> None:
        self.close()
