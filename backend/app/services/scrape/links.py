# 목적: 가져온 페이지의 <a href>에서 다음에 긁을 만한 같은 도메인 레시피 링크 찾기
# 규칙: 같은 hostname + 미방문 + 레시피스러운 경로(/recipe/, /2024/05/01/slug/ ...)
# 프론티어 중복 제거는 crawler 쪽 책임

from __future__ import annotations
import re
from typing import AbstractSet, List
from urllib.parse import urldefrag, urljoin, urlsplit

from bs4 import BeautifulSoup

RECIPE_PATH_SEGMENTS = ("/recipe/", "/recipes/", "/dish/", "/cook/", "/meal/", "/food/")
DATED_POST = re.compile(r"/\d{4}/\d{2}/\d{2}/[^/]+/?$")

def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")

def _hostname(url: str) -> str:
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""

def is_recipe_path(path: str) -> bool:
    p = (path or "").lower()
    padded = p if p.endswith("/") else p + "/"
    return any(seg in padded for seg in RECIPE_PATH_SEGMENTS) or bool(DATED_POST.search(p))

def discover_links(html: str, page_url: str, visited: AbstractSet[str]) -> List[str]:
    host = _hostname(page_url)
    if not host:
        return []

    out: List[str] = []
    for a in _soup(html).find_all("a", href=True):
        href = (a.get("href") or "").strip()
        if not href:
            continue
        try:
            absolute, _ = urldefrag(urljoin(page_url, href))
            parts = urlsplit(absolute)
        except ValueError:
            continue  # 깨진 href (예: http://[::1 ) 는 조용히 버림

        if parts.scheme not in ("http", "https"):
            continue
        if (parts.hostname or "").lower() != host:
            continue
        if absolute in visited:
            continue
        if is_recipe_path(parts.path):
            out.append(absolute)
    return out
