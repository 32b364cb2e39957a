# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""MTConnect document helpers."""

from .extract import DataItemFinder, RegexDataItemFinder, find_data_item
from .values import MissingValue, NumberValue, TextValue, WriteValue, coerce_value
from .xml import XML_CONTENT_TYPE, build_data_items_body, escape_xml

__all__ = [
    "DataItemFinder",
    "MissingValue",
    "NumberValue",
    "RegexDataItemFinder",
    "TextValue",
    "WriteValue",
    "XML_CONTENT_TYPE",
    "build_data_items_body",
    "coerce_value",
    "escape_xml",
    "find_data_item",
]
