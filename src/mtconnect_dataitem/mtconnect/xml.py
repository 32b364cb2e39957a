# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""XML body construction for Solution Engine data item writes."""

from __future__ import annotations

from .values import TextValue, WriteValue

XML_CONTENT_TYPE = "application/xml"

# `&` first so already-produced entities are not escaped twice.
_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(text: str) -> str:
    """Escape the five XML special characters."""
    out = str(text)
    for raw, entity in _XML_ESCAPES:
        out = out.replace(raw, entity)
    return out


def build_data_items_body(data_item_id: str, value: WriteValue | str) -> str:
    """Build the `<DataItems>` payload for a single data item."""
    if isinstance(value, str):
        value = TextValue(value)
    return (
        "<DataItems>"
        f'<DataItem dataItemId="{escape_xml(data_item_id)}">'
        f"<Value>{escape_xml(value.to_text())}</Value>"
        "</DataItem>"
        "</DataItems>"
    )


__all__ = ["XML_CONTENT_TYPE", "build_data_items_body", "escape_xml"]
