# 목적: 시작 URL 하나로 같은 도메인 안에서 너비우선 크롤 → 레시피 모아서 중복 제거 후 반환
# 흐름: frontier pop → fetch → JSON-LD 추출 → (없으면) 셀렉터 추출 → 중복 아니면 수집
#       → 깊이 여유 있으면 링크 발견 → frontier push (남은 페이지 예산만큼만)
# 상태: 요청마다 CrawlState 새로 만들고 끝나면 버림 (전역 상태 없음)

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, List, Optional, Set
from urllib.parse import urldefrag, urlsplit

import httpx

from app.core.config import settings
from app.models.schemas import NO_RECIPES_MESSAGE, RecipeRecord, ScrapeResponse
from app.services.scrape.errors import InvalidSeedUrl
from app.services.scrape.fetcher import build_client, fetch_html
from app.services.scrape.heuristic import extract_heuristic
from app.services.scrape.links import discover_links
from app.services.scrape.structured import extract_structured
from app.services.utils import normalize_key, normalize_many

log = logging.getLogger(__name__)

@dataclass
class FrontierEntry:
    url: str
    depth: int

@dataclass
class CrawlState:
    visited: Set[str] = field(default_factory=set)
    frontier: Deque[FrontierEntry] = field(default_factory=deque)
    queued: Set[str] = field(default_factory=set)
    pages_scraped: int = 0
    collected: List[RecipeRecord] = field(default_factory=list)

    def push(self, url: str, depth: int) -> None:
        self.frontier.append(FrontierEntry(url, depth))
        self.queued.add(url)

    def pop(self) -> FrontierEntry:
        entry = self.frontier.popleft()
        self.queued.discard(entry.url)
        return entry

    def collect(self, rec: RecipeRecord) -> bool:
        if any(is_duplicate(rec, other) for other in self.collected):
            return False
        self.collected.append(rec)
        return True

def is_duplicate(a: RecipeRecord, b: RecipeRecord) -> bool:
    # 제목 + 정렬된 재료 목록이 같으면 같은 레시피 (대소문자/공백 무시)
    return (
        normalize_key(a.title) == normalize_key(b.title)
        and normalize_many(a.ingredients) == normalize_many(b.ingredients)
    )

def extract_page(html: str, page_url: str) -> List[RecipeRecord]:
    # JSON-LD 우선, 하나도 없을 때만 셀렉터 폴백
    recipes = extract_structured(html, page_url)
    if recipes:
        return recipes
    return extract_heuristic(html, page_url)

def validate_seed_url(url: Any) -> str:
    if url is not None and not isinstance(url, str):
        raise InvalidSeedUrl(repr(url), "URL must be a string")
    url = (url or "").strip()
    if not url:
        raise InvalidSeedUrl(url, "URL is required")
    try:
        parts = urlsplit(url)
    except ValueError:
        raise InvalidSeedUrl(url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidSeedUrl(url)
    # 발견 링크와 같은 규칙: #fragment 는 같은 페이지
    return urldefrag(url).url

async def _crawl(client: httpx.AsyncClient, seed_url: str, max_pages: int, max_depth: int) -> List[RecipeRecord]:
    state = CrawlState()
    state.push(seed_url, 0)

    while state.frontier and state.pages_scraped < max_pages:
        entry = state.pop()
        if entry.url in state.visited:
            continue
        state.visited.add(entry.url)
        state.pages_scraped += 1

        fetched = await fetch_html(client, entry.url)
        if fetched is None:
            continue
        # 리다이렉트(예: example.com → www.example.com)면 최종 URL 기준으로 추출/링크 탐색
        page_url, html = fetched
        state.visited.add(page_url)

        try:
            recipes = extract_page(html, page_url)
        except Exception:
            # 한 페이지 파싱 실패로 크롤 전체를 죽이지 않음
            log.exception("extraction failed on %s", page_url)
            continue

        added = sum(1 for rec in recipes if state.collect(rec))
        log.info(
            "[crawl] page %d/%d depth=%d %s → %d found, %d new",
            state.pages_scraped, max_pages, entry.depth, page_url, len(recipes), added,
        )

        if entry.depth >= max_depth:
            continue
        try:
            links = discover_links(html, page_url, state.visited)
        except Exception:
            log.exception("link discovery failed on %s", page_url)
            continue
        for link in links:
            # 이미 예약된 페이지 수 + 소비한 페이지 수가 예산을 넘지 않게
            if len(state.frontier) + state.pages_scraped >= max_pages:
                break
            if link in state.visited or link in state.queued:
                continue
            state.push(link, entry.depth + 1)

    log.info("[crawl] done %s: pages=%d recipes=%d", seed_url, state.pages_scraped, len(state.collected))
    return state.collected

async def crawl_recipes(
    seed_url: str,
    max_pages: Optional[int] = None,
    max_depth: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[RecipeRecord]:
    """시드 URL 기준 제한 크롤. 예산 미지정 시 설정값(기본 5페이지 / 깊이 1)."""
    max_pages = settings.SCRAPE_MAX_PAGES if max_pages is None else max_pages
    max_depth = settings.SCRAPE_MAX_DEPTH if max_depth is None else max_depth

    if client is not None:
        return await _crawl(client, seed_url, max_pages, max_depth)
    async with build_client() as own:
        return await _crawl(own, seed_url, max_pages, max_depth)

async def scrape_url(
    url: Any,
    max_pages: Optional[int] = None,
    max_depth: Optional[int] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ScrapeResponse:
    # 잘못된 입력만 예외(InvalidSeedUrl). 결과 0건은 정상 응답 + 안내 메시지
    seed = validate_seed_url(url)
    recipes = await crawl_recipes(seed, max_pages=max_pages, max_depth=max_depth, client=client)
    if not recipes:
        return ScrapeResponse(recipes=[], message=NO_RECIPES_MESSAGE)
    return ScrapeResponse(recipes=recipes)
