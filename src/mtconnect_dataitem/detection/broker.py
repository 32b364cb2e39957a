# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Solution Engine versus generic MTConnect agent detection."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from ..config import HttpSettings, load_http_settings
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.url import Endpoint, build_probe_url

logger = logging.getLogger(__name__)

STREAMS_MARKER = "MTConnectStreams"
ERROR_MARKER = "MTConnectError"


@dataclass(frozen=True)
class BrokerClassification:
    is_solution_engine: bool


class BrokerTypeCache:
    """
    In-memory broker classifications keyed by `hostname:port`.

    Entries are never expired or invalidated. The lock protects the mapping
    itself; two callers probing the same unseen key may both write, which is
    harmless because the verdict for a key is deterministic.
    """

    def __init__(self) -> None:
        self._entries: dict[str, BrokerClassification] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> BrokerClassification | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, classification: BrokerClassification) -> None:
        with self._lock:
            self._entries[key] = classification

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def looks_like_solution_engine(response: HttpResponse) -> bool:
    """
    Return True when a probe response is a valid Solution Engine streams document.

    Some brokers answer 200 with an error document, so the body decides, not the status.
    """
    if not response.ok or response.status_code != 200:
        return False
    body = response.text or ""
    return STREAMS_MARKER in body and ERROR_MARKER not in body


class BrokerTypeResolver:
    """Classifies brokers, probing each `hostname:port` once per cache lifetime."""

    def __init__(
        self,
        http_client: HttpClient,
        cache: BrokerTypeCache | None = None,
        settings: HttpSettings | None = None,
    ):
        self.http_client = http_client
        self.cache = cache if cache is not None else BrokerTypeCache()
        self.settings = settings or load_http_settings()

    def resolve(self, endpoint: Endpoint) -> bool:
        """Return True for a Solution Engine broker. Never raises."""
        key = endpoint.cache_key
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Using cached broker type for %s: is_solution_engine=%s", key, cached.is_solution_engine)
            return cached.is_solution_engine

        logger.info("Detecting broker type for %s", key)
        is_solution_engine = self._probe(endpoint)
        self.cache.set(key, BrokerClassification(is_solution_engine=is_solution_engine))
        logger.info("Broker detection complete for %s: is_solution_engine=%s", key, is_solution_engine)
        return is_solution_engine

    def _probe(self, endpoint: Endpoint) -> bool:
        request = HttpRequest(url=build_probe_url(endpoint), method="GET", timeout=self.settings.probe_timeout)
        try:
            response = self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Detection probe for %s raised: %s", endpoint.cache_key, exc)
            return False
        if not response.ok:
            logger.debug(
                "Detection probe for %s failed (%s): %s",
                endpoint.cache_key,
                response.error_kind.value if response.error_kind else "unknown",
                response.error_message,
            )
        return looks_like_solution_engine(response)


__all__ = [
    "BrokerClassification",
    "BrokerTypeCache",
    "BrokerTypeResolver",
    "ERROR_MARKER",
    "STREAMS_MARKER",
    "looks_like_solution_engine",
]
