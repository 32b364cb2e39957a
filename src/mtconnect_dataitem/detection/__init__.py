# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Broker type detection."""

from .broker import (
    BrokerClassification,
    BrokerTypeCache,
    BrokerTypeResolver,
    looks_like_solution_engine,
)

__all__ = [
    "BrokerClassification",
    "BrokerTypeCache",
    "BrokerTypeResolver",
    "looks_like_solution_engine",
]
