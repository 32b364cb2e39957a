# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Write values as they arrive from a flow message."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class MissingValue:
    def to_text(self) -> str:
        raise ValueError("No value to render")


@dataclass(frozen=True)
class TextValue:
    text: str

    def to_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class NumberValue:
    number: int | float | Decimal

    def to_text(self) -> str:
        return format_number(self.number)


WriteValue = Union[MissingValue, TextValue, NumberValue]


def format_number(number: int | float | Decimal) -> str:
    """
    Render a number as plain decimal text.

    Integral floats drop the fractional part (`3.0` -> `"3"`) so a value that
    travelled through JSON as a float is written the same way it was entered. Non-finite
    values use the `NaN` / `Infinity` spelling brokers receive from JavaScript clients.
    """
    if isinstance(number, float):
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        if number.is_integer() and abs(number) < 1e21:
            return str(int(number))
        return repr(number)
    if isinstance(number, Decimal):
        return format(number, "f")
    return str(number)


def coerce_value(raw: Any) -> WriteValue:
    """Classify a raw message value; `None` is treated as missing."""
    if raw is None:
        return MissingValue()
    if isinstance(raw, bool):
        return TextValue("true" if raw else "false")
    if isinstance(raw, (int, float, Decimal)):
        return NumberValue(raw)
    return TextValue(str(raw))


__all__ = [
    "MissingValue",
    "NumberValue",
    "TextValue",
    "WriteValue",
    "coerce_value",
    "format_number",
]
