# 목적: URL 하나를 GET 해서 (최종 URL, HTML) 을 돌려준다
# 실패(네트워크/타임아웃/비정상 상태코드)는 None 반환 + 경고 로그 → 크롤은 계속 진행
# 리트라이 없음: URL 당 1회 시도

from __future__ import annotations
import logging
from typing import NamedTuple, Optional

import httpx

from app.core.config import settings

log = logging.getLogger(__name__)

def build_client(timeout: Optional[float] = None, **kwargs) -> httpx.AsyncClient:
    # 크롤 1회 동안 공유하는 클라이언트 (커넥션 재사용)
    return httpx.AsyncClient(
        headers={
            "User-Agent": settings.SCRAPE_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        },
        timeout=settings.SCRAPE_TIMEOUT if timeout is None else timeout,
        follow_redirects=True,
        **kwargs,
    )

class FetchedPage(NamedTuple):
    url: str    # 리다이렉트 따라간 최종 URL (링크 해석/도메인 판정 기준)
    html: str

async def fetch_html(client: httpx.AsyncClient, url: str) -> Optional[FetchedPage]:
    try:
        r = await client.get(url)
    except httpx.HTTPError as e:
        log.warning("fetch failed %s: %s", url, e)
        return None

    if not r.is_success:
        log.warning("fetch failed %s: HTTP %s %s", url, r.status_code, r.reason_phrase)
        return None
    return FetchedPage(str(r.url), r.text)
