# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Boundary between the broker nodes and the flow runtime hosting them.

A node receives a message (a plain dict) together with a `FlowHost`. The host
forwards results downstream (`send`), acknowledges completion (`done`, with an
optional error used for flow-level error routing) and receives error/warning
reports and status updates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)

FlowMessage = dict[str, Any]


@dataclass(frozen=True)
class NodeStatus:
    """Status indicator shown by the host next to a node."""

    fill: str | None = None
    shape: str | None = None
    text: str | None = None

    @classmethod
    def clear(cls) -> NodeStatus:
        return cls()

    @classmethod
    def busy(cls, text: str) -> NodeStatus:
        return cls("blue", "dot", text)

    @classmethod
    def success(cls, text: str) -> NodeStatus:
        return cls("green", "dot", text)

    @classmethod
    def warning(cls, text: str) -> NodeStatus:
        return cls("yellow", "ring", text)

    @classmethod
    def failure(cls, text: str) -> NodeStatus:
        return cls("red", "ring", text)


class FlowHost(Protocol):
    def send(self, msg: FlowMessage) -> None: ...

    def done(self, error: Exception | None = None) -> None: ...

    def error(self, text: str, msg: FlowMessage | None = None) -> None: ...

    def warn(self, text: str) -> None: ...

    def status(self, status: NodeStatus) -> None: ...


@dataclass
class CollectingHost:
    """FlowHost that records everything a node reports; used by the CLI and tests."""

    sent: list[FlowMessage] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    statuses: list[NodeStatus] = field(default_factory=list)
    completed: bool = False
    completion_error: Exception | None = None

    def send(self, msg: FlowMessage) -> None:
        self.sent.append(msg)

    def done(self, error: Exception | None = None) -> None:
        self.completed = True
        self.completion_error = error

    def error(self, text: str, msg: FlowMessage | None = None) -> None:  # noqa: ARG002
        logger.error(text)
        self.errors.append(text)

    def warn(self, text: str) -> None:
        logger.warning(text)
        self.warnings.append(text)

    def status(self, status: NodeStatus) -> None:
        self.statuses.append(status)

    @property
    def last_message(self) -> FlowMessage | None:
        return self.sent[-1] if self.sent else None


def override(msg: FlowMessage, key: str, default: Any) -> Any:
    """Return `msg[key]` when truthy, else the configured default."""
    value = msg.get(key)
    return value if value else default


__all__ = ["CollectingHost", "FlowHost", "FlowMessage", "NodeStatus", "override"]
