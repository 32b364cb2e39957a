# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Flow nodes for reading and writing MTConnect data items."""

from .base import CollectingHost, FlowHost, FlowMessage, NodeStatus
from .reader import DataItemReaderNode, ReaderConfig
from .writer import DataItemWriterNode, WriterConfig

__all__ = [
    "CollectingHost",
    "DataItemReaderNode",
    "DataItemWriterNode",
    "FlowHost",
    "FlowMessage",
    "NodeStatus",
    "ReaderConfig",
    "WriterConfig",
]
