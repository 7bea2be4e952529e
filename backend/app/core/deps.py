# 공용 의존성/헬퍼 (레시피 소유자 식별, 스크랩용 HTTP 클라이언트)
# 인증은 이 서비스 밖의 일이라, 프론트가 넘긴 X-User-Id 가 있으면 그걸 쓰고
# 없으면 익명 쿠키를 발급해서 저장 레시피의 주인으로 삼는다.
import uuid
from typing import AsyncIterator, Optional

import httpx
from fastapi import Header, Request, Response

from app.services.scrape.fetcher import build_client

COOKIE = "anon_id"
MAX_AGE = 60 * 60 * 24 * 365 * 2  # 2년

def get_owner_id(
    request: Request,
    response: Response,
    x_user_id: Optional[str] = Header(default=None),
) -> str:
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    v = request.cookies.get(COOKIE)
    if not v:
        v = uuid.uuid4().hex
        response.set_cookie(COOKIE, v, max_age=MAX_AGE, httponly=True, samesite="lax")
    return v

async def get_scrape_client() -> AsyncIterator[httpx.AsyncClient]:
    # 요청 1건 = 크롤 1회 = 클라이언트 1개 (테스트에서는 MockTransport 클라이언트로 override)
    async with build_client() as client:
        yield client
