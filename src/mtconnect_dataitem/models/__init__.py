# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed result models."""

from .results import DataItemResult, WriteOutcome

__all__ = ["DataItemResult", "WriteOutcome"]
