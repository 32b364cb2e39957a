# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the broker nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorKind

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations.

    `timeout` is the deadline for the whole exchange; the client aborts the
    request once it expires.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """Normalized HTTP response; status and body are left uninterpreted."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_kind: ErrorKind | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """True for a completed exchange with a 2xx status."""
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    @classmethod
    def failure(cls, message: str, kind: ErrorKind = ErrorKind.NETWORK_ERROR, *, error_type: str | None = None) -> HttpResponse:
        """Build a transport-failure response."""
        return cls(ok=False, error_message=message, error_type=error_type, error_kind=kind)
