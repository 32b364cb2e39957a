# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import (
    Endpoint,
    build_current_url,
    build_probe_url,
    build_write_url,
    normalize_host,
)

__all__ = [
    "Endpoint",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "build_current_url",
    "build_probe_url",
    "build_write_url",
    "create_default_http_client",
    "normalize_host",
]
