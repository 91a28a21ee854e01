"""Client for the public Hacker News Firebase API.

The API is read-only and unauthenticated. A feed endpoint such as
``topstories.json`` returns a ranked JSON array of item ids, and
``item/<id>.json`` returns a single item whose fields are all optional. The
client performs exactly one request per call: retries and pacing belong to the
updater that drives it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Protocol

import requests

from ..errors import DecodeError, TransportError
from ..models import RawItem


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hacker-news.firebaseio.com/v0/"
FEEDS = ("top", "new", "ask", "show", "job")


class ItemSource(Protocol):
    """Anything that can list identifiers and fetch one item by id."""

    def fetch_identifier_list(self) -> List[int]: ...

    def fetch_item_details(self, identifier: int) -> RawItem: ...


@dataclass
class HackerNewsClient:
    """Stateless request/response wrapper around the Hacker News endpoints.

    Every failure is translated into the reader's error hierarchy:
    ``TransportError`` for anything ``requests`` raises (connection problems,
    timeouts, non-2xx statuses) and ``DecodeError`` for bodies that are not
    JSON or do not have the expected shape.
    """

    base_url: str = DEFAULT_BASE_URL
    feed: str = "top"
    request_timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self) -> None:
        if self.feed not in FEEDS:
            raise ValueError(f"unknown feed {self.feed!r}; expected one of {', '.join(FEEDS)}")
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        self.session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": os.getenv("HNREADER_USER_AGENT", "hnreader/0.1"),
            }
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fetch_identifier_list(self) -> List[int]:
        """Return the ranked identifiers of the configured feed.

        Raises:
            TransportError: If the request fails.
            DecodeError: If the body is not a JSON array of non-negative ints.
        """

        url = f"{self.base_url}{self.feed}stories.json"
        payload = self._get_json(url)
        if not isinstance(payload, list):
            raise DecodeError(f"expected JSON array, got {type(payload).__name__}", url=url)

        identifiers: List[int] = []
        for value in payload:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise DecodeError(f"invalid identifier {value!r} in {self.feed} feed", url=url)
            identifiers.append(value)

        logger.info(
            "hackernews.feed.fetched",
            extra={"feed": self.feed, "count": len(identifiers)},
        )
        return identifiers

    def fetch_item_details(self, identifier: int) -> RawItem:
        """Fetch a single item. Missing fields decode to ``None``."""

        url = f"{self.base_url}item/{identifier}.json"
        payload = self._get_json(url)
        try:
            return RawItem.from_json(payload, identifier)
        except DecodeError as exc:
            raise DecodeError(str(exc), url=url) from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, url: str) -> Any:
        try:
            response = self.session.get(url, timeout=self.request_timeout)
            logger.info(
                "hackernews.request",
                extra={"url": url, "status_code": response.status_code},
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning(
                "hackernews.request.failed",
                extra={"url": url, "error": str(exc)},
            )
            raise TransportError(f"GET {url} failed: {exc}", url=url) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"GET {url} returned invalid JSON: {exc}", url=url) from exc
