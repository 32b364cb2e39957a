# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
mtconnect-dataitem package entrypoint.

This package provides two flow nodes for MTConnect brokers: a reader that
fetches one data item's current value (detecting Solution Engine brokers and
caching the verdict per host and port) and a writer that sets a data item on
a Solution Engine broker. HTTP behavior is abstracted behind an injectable
client interface, and domain objects are modeled with typed dataclasses.
"""

from .config import HttpSettings, load_http_settings
from .detection import BrokerTypeCache, BrokerTypeResolver
from .errors import ErrorKind
from .http import (
    Endpoint,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import DataItemResult, WriteOutcome
from .mtconnect import find_data_item
from .nodes import (
    CollectingHost,
    DataItemReaderNode,
    DataItemWriterNode,
    FlowHost,
    NodeStatus,
    ReaderConfig,
    WriterConfig,
)
from .runtime import DataItemRuntime
from .version import __version__

__all__ = [
    "BrokerTypeCache",
    "BrokerTypeResolver",
    "CollectingHost",
    "DataItemReaderNode",
    "DataItemResult",
    "DataItemRuntime",
    "DataItemWriterNode",
    "Endpoint",
    "ErrorKind",
    "FlowHost",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "NodeStatus",
    "ReaderConfig",
    "StubHttpClient",
    "WriteOutcome",
    "WriterConfig",
    "create_default_http_client",
    "find_data_item",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
