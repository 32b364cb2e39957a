# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Host normalization and broker URL construction."""

from __future__ import annotations

from dataclasses import dataclass

SOLUTION_ENGINE_CURRENT_PATH = "/api/v6/mtc/current"
SOLUTION_ENGINE_WRITE_PATH = "/api/v6/agent/data"

_HTTPS_PREFIX = "https://"
_HTTP_PREFIX = "http://"


@dataclass(frozen=True)
class Endpoint:
    """Target broker address derived from a raw host string."""

    hostname: str
    port: int | str
    use_tls: bool = False

    @property
    def scheme(self) -> str:
        return "https:" if self.use_tls else "http:"

    @property
    def cache_key(self) -> str:
        return f"{self.hostname}:{self.port}"

    @classmethod
    def from_host(cls, raw_host: str | None, port: int | str) -> Endpoint:
        hostname, use_tls = normalize_host(raw_host)
        return cls(hostname=hostname, port=port, use_tls=use_tls)


def normalize_host(raw_host: str | None) -> tuple[str, bool]:
    """
    Strip an optional scheme prefix and trailing slashes from a host string.

    Returns `(hostname, use_tls)`; `use_tls` is only True for an `https://` prefix.
    Malformed input is normalized best-effort and never raises.

    Example:
      https://broker.local/ -> ("broker.local", True)
    """
    host = str(raw_host or "")
    use_tls = False
    if host[: len(_HTTPS_PREFIX)].lower() == _HTTPS_PREFIX:
        host = host[len(_HTTPS_PREFIX) :]
        use_tls = True
    elif host[: len(_HTTP_PREFIX)].lower() == _HTTP_PREFIX:
        host = host[len(_HTTP_PREFIX) :]
    return host.rstrip("/"), use_tls


def build_current_url(
    hostname: str,
    port: int | str,
    path: str | None,
    is_solution_engine: bool,
    scheme: str = "http:",
) -> str:
    """Build the MTConnect "current" URL for the detected broker type."""
    base = f"{scheme}//{hostname}:{port}"
    if is_solution_engine:
        return f"{base}{SOLUTION_ENGINE_CURRENT_PATH}"
    clean_path = str(path or "").strip("/")
    if clean_path:
        return f"{base}/{clean_path}/current"
    return f"{base}/current"


def build_probe_url(endpoint: Endpoint) -> str:
    """URL used to detect a Solution Engine broker."""
    return f"{endpoint.scheme}//{endpoint.hostname}:{endpoint.port}{SOLUTION_ENGINE_CURRENT_PATH}"


def build_write_url(endpoint: Endpoint) -> str:
    """Solution Engine data item write URL."""
    return f"{endpoint.scheme}//{endpoint.hostname}:{endpoint.port}{SOLUTION_ENGINE_WRITE_PATH}"


__all__ = [
    "Endpoint",
    "SOLUTION_ENGINE_CURRENT_PATH",
    "SOLUTION_ENGINE_WRITE_PATH",
    "build_current_url",
    "build_probe_url",
    "build_write_url",
    "normalize_host",
]
