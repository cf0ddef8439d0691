"""
Shared fixtures: fake Reddit JSON payloads and an in-memory transport.
"""

from typing import Any, Dict, List, Optional

import httpx
import pytest

from src.config import Settings
from src.reddit.client import RedditClient


def link(n: int, **fields: Any) -> Dict[str, Any]:
    """Raw t3 envelope for the n-th test link."""
    data = {"id": f"l{n}", "name": f"t3_l{n}", "title": f"Link {n}", "created_utc": 1700000000.0}
    data.update(fields)
    return {"kind": "t3", "data": data}


def listing(children: List[Any], after: Optional[str] = None, before: Optional[str] = None) -> Dict[str, Any]:
    """Raw Listing envelope."""
    return {
        "kind": "Listing",
        "data": {
            "after": after,
            "before": before,
            "dist": len(children),
            "modhash": "",
            "children": children,
        },
    }


class FakeReddit:
    """
    In-memory stand-in for reddit.com.

    Listing pages are keyed by the ``after`` cursor that requests them
    (None for the first page). Every request is recorded.
    """

    def __init__(self) -> None:
        self.pages: Dict[Optional[str], Any] = {}
        self.responses: Dict[str, httpx.Response] = {}
        self.failures: Dict[Optional[str], int] = {}
        self.requests: List[httpx.Request] = []

    def add_pages(self, sizes: List[int], prefix: str = "p") -> None:
        """Serve consecutive pages of the given sizes, chained by cursors."""
        n = 0
        cursor = None
        for i, size in enumerate(sizes):
            children = [link(n + j) for j in range(size)]
            n += size
            next_cursor = f"t3_{prefix}{i + 1}" if i + 1 < len(sizes) else None
            self.pages[cursor] = listing(children, after=next_cursor)
            cursor = next_cursor

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.responses:
            return self.responses[request.url.path]
        after = request.url.params.get("after")
        if after in self.failures:
            return httpx.Response(self.failures[after], json={"error": self.failures[after]})
        if after not in self.pages:
            return httpx.Response(404, json={"message": "Not Found", "error": 404})
        return httpx.Response(200, json=self.pages[after])

    def params(self, index: int) -> Dict[str, str]:
        return dict(self.requests[index].url.params)


@pytest.fixture
def fake_reddit() -> FakeReddit:
    return FakeReddit()


@pytest.fixture
def settings() -> Settings:
    return Settings(min_interval_ms=0)


@pytest.fixture
def make_client(fake_reddit, settings):
    """Build a RedditClient wired to fake_reddit; the 0 ms settings give it an unthrottled limiter."""

    def _make(**kwargs: Any) -> RedditClient:
        kwargs.setdefault("settings", settings)
        kwargs.setdefault("transport", httpx.MockTransport(fake_reddit.handler))
        return RedditClient(**kwargs)

    return _make
