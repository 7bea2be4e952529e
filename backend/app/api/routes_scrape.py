# 목적: URL 하나 → 레시피 목록. 프론트 "레시피 가져오기" 버튼이 호출
# 사용: POST /scrape {"url": "https://..."} → {"recipes": [...]} | {"recipes": [], "message": "..."}
# 실패: 입력 문제는 400 {"error"}, 파이프라인 자체 오류는 500 {"error"}
#       (페이지 단위 fetch 실패는 크롤러 안에서 흡수되므로 여기까지 안 올라옴)

from __future__ import annotations
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.core.deps import get_scrape_client
from app.models.schemas import ErrorResponse, ScrapeRequest, ScrapeResponse
from app.services.scrape.crawler import scrape_url
from app.services.scrape.errors import InvalidSeedUrl

log = logging.getLogger(__name__)

SCRAPE_PATH = "/scrape"

router = APIRouter(prefix=SCRAPE_PATH, tags=["scrape"])

@router.post(
    "",
    responses={
        200: {"model": ScrapeResponse},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def scrape(
    body: Optional[ScrapeRequest] = Body(default=None),
    client: httpx.AsyncClient = Depends(get_scrape_client),
):
    url = body.url if body else None
    try:
        result = await scrape_url(url, client=client)
    except InvalidSeedUrl as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        log.exception("scrape failed for %s", url)
        return JSONResponse({"error": str(e) or e.__class__.__name__}, status_code=500)

    payload = {"recipes": [r.model_dump() for r in result.recipes]}
    if result.message:
        payload["message"] = result.message
    return payload
