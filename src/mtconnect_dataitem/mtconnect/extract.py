# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Data item lookup in MTConnect "current" documents.

The default finder is a lightweight pattern scan, not an XML parser. It
assumes the flat shape agents emit for observations: one element per data
item, attributes on the opening tag and plain text content. Namespaces,
CDATA sections and entity decoding are not handled; when several elements
share a `dataItemId` the first one in document order wins.
"""

from __future__ import annotations

import re
from typing import Protocol

from ..models.results import DataItemResult

_TIMESTAMP_RE = re.compile(r'\btimestamp="([^"]*)"')
_SEQUENCE_RE = re.compile(r'\bsequence="([^"]*)"')
_NAME_RE = re.compile(r'\bname="([^"]*)"')


class DataItemFinder(Protocol):
    """Locates a data item by id in a "current" document."""

    def find_by_id(self, document: str, data_item_id: str) -> DataItemResult: ...


def _attribute(pattern: re.Pattern[str], tag: str) -> str | None:
    match = pattern.search(tag)
    return match.group(1) if match else None


def _fallback_name(data_item_id: str) -> str:
    return data_item_id.split(".")[-1]


class RegexDataItemFinder:
    """Pattern-scanning DataItemFinder."""

    def find_by_id(self, document: str, data_item_id: str) -> DataItemResult:
        escaped_id = re.escape(data_item_id)
        value_match = re.search(f'dataItemId="{escaped_id}"[^>]*>([^<]*)<', document)
        if not value_match:
            return DataItemResult.not_found()

        timestamp = sequence = name = None
        tag_match = re.search(f'<\\w+[^>]*dataItemId="{escaped_id}"[^>]*>', document)
        if tag_match:
            tag = tag_match.group(0)
            timestamp = _attribute(_TIMESTAMP_RE, tag)
            sequence = _attribute(_SEQUENCE_RE, tag)
            name = _attribute(_NAME_RE, tag)

        return DataItemResult(
            found=True,
            value=value_match.group(1).strip(),
            timestamp=timestamp,
            sequence=sequence,
            name=name or _fallback_name(data_item_id),
        )


_DEFAULT_FINDER = RegexDataItemFinder()


def find_data_item(document: str, data_item_id: str, finder: DataItemFinder | None = None) -> DataItemResult:
    """Look up `data_item_id` in `document` with the given (or default) finder."""
    return (finder or _DEFAULT_FINDER).find_by_id(document, data_item_id)


__all__ = ["DataItemFinder", "RegexDataItemFinder", "find_data_item"]
