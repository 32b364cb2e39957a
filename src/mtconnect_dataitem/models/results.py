# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Read and write result models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class DataItemResult:
    """Outcome of looking up one data item in an MTConnect "current" document."""

    found: bool
    value: str | None = None
    timestamp: str | None = None
    sequence: str | None = None
    name: str | None = None

    @classmethod
    def not_found(cls) -> DataItemResult:
        return cls(found=False)

    def to_dict(self) -> dict[str, Any]:
        if not self.found:
            return {"found": False}
        return {
            "found": True,
            "value": self.value,
            "timestamp": self.timestamp,
            "sequence": self.sequence,
            "name": self.name,
        }


@dataclass
class WriteOutcome:
    """Result payload of a data item write; `value` keeps the caller's original type."""

    success: bool
    data_item_id: str
    value: Any
    status_code: int | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "dataItemId": self.data_item_id,
            "value": self.value,
        }
        if self.status_code is not None:
            payload["statusCode"] = self.status_code
        if self.error is not None:
            payload["error"] = self.error
        return payload
