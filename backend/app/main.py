# app/main.py
# FastAPI 앱 초기화 및 라우터 설정
# 라우터는 각 기능별로 분리하여 관리

from __future__ import annotations

import logging
from asyncio import sleep

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes_recipes import router as recipes_router   # 쿡북 저장/조회
from app.api.routes_scrape import router as scrape_router, SCRAPE_PATH  # URL → 레시피 추출
from app.core.config import settings
from app.db.init import close_db, init_db, ping_db
from app.db.indexes import ensure_indexes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger("app")

DB_INIT_RETRIES = 5

app = FastAPI(title="Recipe Box - Scraper API", version="0.1.0")

# CORS: 프론트 개발 서버 허용 + 쿠키 전달
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# /scrape 는 프론트가 {"error"} 하나만 보므로 본문 파싱 실패(JSON 아님 등)도 같은 모양으로
@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    if request.url.path.rstrip("/") == SCRAPE_PATH:
        first = exc.errors()[0] if exc.errors() else {}
        return JSONResponse({"error": f"Invalid request: {first.get('msg', 'bad body')}"}, status_code=400)
    return await request_validation_exception_handler(request, exc)

# 앱 시작/종료 이벤트 핸들러
@app.on_event("startup")
async def on_startup() -> None:
    # 1) DB 먼저 붙는다. 실패해도 스크래핑은 DB 없이 동작하므로 앱은 계속 뜬다
    db = None
    for i in range(DB_INIT_RETRIES):
        try:
            db = await init_db()
            log.info("[startup] db ready")
            break
        except Exception as e:
            log.warning("[startup] db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("[startup] db init failed after retries; /recipes disabled")
        return

    # 2) 인덱스 보장
    try:
        await ensure_indexes()
        log.info("[startup] indexes ensured")
    except Exception as e:
        log.warning("[startup] ensure_indexes failed: %s", e)

@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_db()

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    return {"status": "ok", "db": await ping_db()}

# 라우터 prefix는 각 파일 내에서 정의함 , 중복 prefix 금지
app.include_router(scrape_router)
app.include_router(recipes_router)
