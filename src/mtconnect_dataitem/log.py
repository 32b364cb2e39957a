# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for mtconnect-dataitem."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use.

    The level falls back to `MTCONNECT_LOG_LEVEL`, read when this is called, then WARNING.
    """
    effective_level = (level or os.getenv("MTCONNECT_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format=LOG_FORMAT,
    )
    # httpx logs every request at INFO; keep it quiet unless debugging.
    if logging.getLogger().getEffectiveLevel() > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["setup_logging"]
