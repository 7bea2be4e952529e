"""
Shared fixtures: an in-memory "web" served through httpx.MockTransport.

Each test describes the site it crawls as {url: html}; unknown URLs answer 404.
"""

import json
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest

class Redirect:
    def __init__(self, location: str, status: int = 301):
        self.location = location
        self.status = status

Page = Union[str, int, Exception, Redirect]

def ld_json(data) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'

def page(body: str = "", head: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"

class FakeWeb:
    def __init__(self, pages: Dict[str, Page]):
        self.pages = pages
        self.requested: List[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        content = self.pages.get(url, 404)
        if isinstance(content, Exception):
            raise content
        if isinstance(content, Redirect):
            return httpx.Response(content.status, headers={"location": content.location})
        if isinstance(content, int):
            return httpx.Response(content, text="nope")
        return httpx.Response(200, text=content, headers={"content-type": "text/html"})

    def client(self) -> httpx.AsyncClient:
        # follow redirects the way build_client() does
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), follow_redirects=True)

@pytest.fixture
def fake_web() -> Callable[[Optional[Dict[str, Page]]], FakeWeb]:
    def _make(pages: Optional[Dict[str, Page]] = None) -> FakeWeb:
        return FakeWeb(pages or {})
    return _make
