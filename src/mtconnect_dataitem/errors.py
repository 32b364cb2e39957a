# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
from enum import Enum

import httpx


class ErrorKind(str, Enum):
    MISSING_INPUT = "MissingInput"
    NETWORK_ERROR = "NetworkError"
    TIMEOUT = "Timeout"
    HTTP_ERROR = "HttpError"
    NOT_FOUND = "NotFound"
    PARSE_ERROR = "ParseError"


class DataItemError(Exception):
    """Base class for failures reported through a node's completion signal."""

    kind: ErrorKind = ErrorKind.NETWORK_ERROR

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MissingInputError(DataItemError):
    kind = ErrorKind.MISSING_INPUT


class BrokerNetworkError(DataItemError):
    kind = ErrorKind.NETWORK_ERROR


class BrokerTimeoutError(DataItemError):
    kind = ErrorKind.TIMEOUT


class BrokerHttpError(DataItemError):
    kind = ErrorKind.HTTP_ERROR


class DataItemNotFoundError(DataItemError):
    kind = ErrorKind.NOT_FOUND


class DocumentParseError(DataItemError):
    kind = ErrorKind.PARSE_ERROR


_ERRORS_BY_KIND: dict[ErrorKind, type[DataItemError]] = {
    ErrorKind.MISSING_INPUT: MissingInputError,
    ErrorKind.NETWORK_ERROR: BrokerNetworkError,
    ErrorKind.TIMEOUT: BrokerTimeoutError,
    ErrorKind.HTTP_ERROR: BrokerHttpError,
    ErrorKind.NOT_FOUND: DataItemNotFoundError,
    ErrorKind.PARSE_ERROR: DocumentParseError,
}


def error_for_kind(kind: ErrorKind, message: str, *, status_code: int | None = None) -> DataItemError:
    """Build the exception type matching an ErrorKind."""
    return _ERRORS_BY_KIND.get(kind, DataItemError)(message, status_code=status_code)


def categorize_exception(exc: Exception) -> ErrorKind:
    """
    Map Python/httpx transport exceptions to an ErrorKind.

    Everything that is not a deadline expiry is a network-kind failure.
    """
    if isinstance(exc, (httpx.TimeoutException, socket.timeout, TimeoutError)):
        return ErrorKind.TIMEOUT

    return ErrorKind.NETWORK_ERROR


def error_kind_to_reason(kind: ErrorKind | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorKind.MISSING_INPUT: "Required input missing",
        ErrorKind.NETWORK_ERROR: "HTTP request failed",
        ErrorKind.TIMEOUT: "Request timed out",
        ErrorKind.HTTP_ERROR: "Broker returned an error status",
        ErrorKind.NOT_FOUND: "Data item not found",
        ErrorKind.PARSE_ERROR: "Failed to parse MTConnect response",
        None: "",
    }
    return mapping.get(kind, "Request failed")


__all__ = [
    "BrokerHttpError",
    "BrokerNetworkError",
    "BrokerTimeoutError",
    "DataItemError",
    "DataItemNotFoundError",
    "DocumentParseError",
    "ErrorKind",
    "MissingInputError",
    "categorize_exception",
    "error_for_kind",
    "error_kind_to_reason",
]
