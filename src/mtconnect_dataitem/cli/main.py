# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""mtconnect-dataitem CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorKind, error_kind_to_reason
from ..http import create_default_http_client
from ..log import setup_logging
from ..nodes.base import CollectingHost
from ..runtime import DataItemRuntime


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read or write a single MTConnect data item")
    parser.add_argument("--json", action="store_true", help="Output the result message as JSON")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed brokers)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: MTCONNECT_LOG_LEVEL or WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    get = sub.add_parser("get", help="Read a data item's current value")
    get.add_argument("host", help="Broker host, optionally prefixed with http:// or https://")
    get.add_argument("data_item_id", help="dataItemId to read")
    get.add_argument("--port", default=None, help="Broker port (default: 5000)")
    get.add_argument("--path", default="", help="Device path on a generic agent (e.g. /mill)")

    put = sub.add_parser("set", help="Write a data item value to a Solution Engine broker")
    put.add_argument("host", help="Broker host, optionally prefixed with http:// or https://")
    put.add_argument("data_item_id", help="dataItemId to write")
    put.add_argument("value", help="Value to write")
    put.add_argument("--port", default=None, help="Broker port (default: 7200)")
    put.add_argument(
        "--json-value",
        action="store_true",
        help="Decode VALUE as JSON so numbers and booleans keep their type",
    )
    return parser


def _build_message(args: argparse.Namespace) -> dict[str, Any]:
    msg: dict[str, Any] = {"host": args.host, "dataItemId": args.data_item_id}
    if args.port:
        msg["port"] = args.port
    if args.command == "get":
        msg["path"] = args.path
    else:
        msg["value"] = json.loads(args.value) if args.json_value else args.value
    return msg


def _reason(msg: dict[str, Any]) -> str:
    try:
        return error_kind_to_reason(ErrorKind(msg.get("errorKind")))
    except ValueError:
        return error_kind_to_reason(None)


def _succeeded(host: CollectingHost) -> bool:
    msg = host.last_message
    return bool(msg) and not host.errors and host.completion_error is None and "errorKind" not in msg


def _print_json(msg: dict[str, Any] | None) -> None:
    json.dump(msg, sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def _pretty_print(command: str, host: CollectingHost) -> None:
    msg = host.last_message
    if msg is None:
        for text in host.errors:
            print(f"[mtconnect] Error: {text}")
        return
    if command == "get":
        if "errorKind" in msg:
            print(f"[mtconnect] {msg.get('dataItemId')}: {_reason(msg)} ({msg['errorKind']}) - {msg.get('error')}")
            return
        print(f"[mtconnect] {msg.get('name')} ({msg.get('dataItemId')}) = {msg.get('payload')}")
        if msg.get("timestamp"):
            print(f"Timestamp: {msg['timestamp']}")
        if msg.get("sequence"):
            print(f"Sequence: {msg['sequence']}")
        return

    payload = msg.get("payload") or {}
    if payload.get("success"):
        print(f"[mtconnect] Set {payload.get('dataItemId')} = {payload.get('value')} (HTTP {payload.get('statusCode')})")
    else:
        status = payload.get("statusCode")
        suffix = f" (HTTP {status})" if status is not None else ""
        print(f"[mtconnect] Failed to set {payload.get('dataItemId')}{suffix}: {payload.get('error')}")
        if msg.get("errorKind"):
            print(f"Reason: {_reason(msg)}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        msg = _build_message(args)
    except ValueError as exc:
        parser.error(f"VALUE is not valid JSON: {exc}")

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    http_client = create_default_http_client(settings)

    with DataItemRuntime(http_client=http_client, settings=settings) as runtime:
        host = runtime.read(msg) if args.command == "get" else runtime.write(msg)

    if args.json:
        _print_json(host.last_message)
    else:
        _pretty_print(args.command, host)

    return 0 if _succeeded(host) else 1


if __name__ == "__main__":
    raise SystemExit(main())
