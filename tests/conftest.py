from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

from hnreader.errors import TransportError
from hnreader.models import RawItem


@dataclass
class FakeSource:
    """
    In-memory ItemSource:
    - ``identifiers`` is returned by fetch_identifier_list (or raised if an exception)
    - ``failures[id]`` counts how many upcoming fetches of ``id`` should fail
    - every fetch is recorded in ``calls``
    """

    identifiers: Union[List[int], Exception] = field(default_factory=list)
    titles: Dict[int, str] = field(default_factory=dict)
    failures: Dict[int, int] = field(default_factory=dict)
    calls: List[int] = field(default_factory=list)
    list_calls: int = 0

    def fetch_identifier_list(self) -> List[int]:
        self.list_calls += 1
        if isinstance(self.identifiers, Exception):
            raise self.identifiers
        return list(self.identifiers)

    def fetch_item_details(self, identifier: int) -> RawItem:
        self.calls.append(identifier)
        remaining = self.failures.get(identifier, 0)
        if remaining:
            self.failures[identifier] = remaining - 1
            raise TransportError(f"simulated failure for {identifier}", url=f"item/{identifier}.json")
        return RawItem(
            id=identifier,
            by=f"user{identifier}",
            title=self.titles.get(identifier, f"Item {identifier}"),
            url=f"https://example.com/{identifier}",
            type="story",
        )


@dataclass
class FakeResponse:
    status_code: int = 200
    body: Any = None
    text: Optional[str] = None
    url: str = ""

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}")

    def json(self) -> Any:
        raw = self.text if self.text is not None else json.dumps(self.body)
        return json.loads(raw)


@dataclass
class FakeSession:
    """Stands in for requests.Session: maps URL -> FakeResponse or exception."""

    responses: Dict[str, Union[FakeResponse, Exception]] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)
    timeouts: List[Any] = field(default_factory=list)

    def get(self, url: str, timeout: Any = None) -> FakeResponse:
        self.calls.append(url)
        self.timeouts.append(timeout)
        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        outcome.url = url
        return outcome


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
