"""
Shared fixtures: an in-memory stand-in for requests.Session so no test touches the network.
"""

import sys
from pathlib import Path
from typing import Dict, Union

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sitemap_class_counter.sitemap_fetcher import PageFetcher


def urlset(*locs: str, namespaced: bool = True) -> str:
    xmlns = ' xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' if namespaced else ""
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<urlset{xmlns}>{entries}</urlset>'


class FakeResponse:
    """Body is served as UTF-8 bytes; `.text` decodes with `encoding`, as requests
    does from the Content-Type header (ISO-8859-1 for text/* without a charset)."""

    def __init__(self, status_code: int, body: str = "", encoding: str = "utf-8"):
        self.status_code = status_code
        self.content = body.encode("utf-8")
        self.encoding = encoding

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding)


class FakeSession:
    """Maps URL -> (status, body[, encoding]) or an exception to raise."""

    def __init__(self, routes: Dict[str, Union[tuple, Exception]]):
        self.routes = routes
        self.headers = {}
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        route = self.routes.get(url, (404, "not found"))
        if isinstance(route, Exception):
            raise route
        return FakeResponse(*route)


@pytest.fixture
def make_fetcher():
    def _make(routes):
        session = FakeSession(routes)
        return PageFetcher(config={"user_agent": "Test/1.0"}, session=session)
    return _make
