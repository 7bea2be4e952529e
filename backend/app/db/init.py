# app/db/init.py
# 쿡북 저장용 Mongo 핸들 (motor). 스크래핑 자체는 DB 없이 돌아가므로
# 연결 실패가 앱 기동을 막지 않게 상태를 모듈에 들고 있다가 필요할 때만 꺼내 쓴다.

from __future__ import annotations
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings

log = logging.getLogger(__name__)

SERVER_SELECTION_TIMEOUT_MS = 3000  # 기동 재시도 루프가 빨리 돌도록 짧게

class DatabaseNotReady(RuntimeError):
    pass

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None

async def init_db(uri: Optional[str] = None, name: Optional[str] = None) -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is not None:
        return _db

    client = AsyncIOMotorClient(uri or settings.MONGO_URI, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)
    db = client[name or settings.MONGO_DB]
    try:
        await db.command("ping")
    except Exception:
        client.close()  # 반쯤 열린 클라이언트 남기지 않음
        raise

    _client, _db = client, db
    log.info("mongo connected: db=%s", db.name)
    return _db

def get_db() -> AsyncIOMotorDatabase:
    if _db is None:
        raise DatabaseNotReady("MongoDB is not initialized yet.")
    return _db

async def ping_db() -> str:
    # /health 용: "skip"(미연결) | "ok" | "error: ..."
    if _db is None:
        return "skip"
    try:
        await _db.command("ping")
        return "ok"
    except Exception as e:
        return f"error: {e}"

async def close_db() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
