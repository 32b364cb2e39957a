# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for mtconnect-dataitem."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"mtconnect-dataitem/{__version__}"

DEFAULT_READ_PORT = 5000
DEFAULT_WRITE_PORT = 7200


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults.

    `timeout` bounds the read fetch, `probe_timeout` the broker-type detection
    request and `write_timeout` the data item POST.
    """

    timeout: float = 10.0
    probe_timeout: float = 3.0
    write_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("MTCONNECT_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_float_env("MTCONNECT_HTTP_TIMEOUT", cls.timeout),
            probe_timeout=_float_env("MTCONNECT_PROBE_TIMEOUT", cls.probe_timeout),
            write_timeout=_float_env("MTCONNECT_WRITE_TIMEOUT", cls.write_timeout),
            user_agent=os.getenv("MTCONNECT_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("MTCONNECT_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
