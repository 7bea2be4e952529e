# 환경변수 로딩 (.env)
from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGO_DB: str = "recipebox"

    # 스크래핑 예산: 요청당 최대 페이지 수 / 시드 기준 링크 깊이
    SCRAPE_MAX_PAGES: int = 5
    SCRAPE_MAX_DEPTH: int = 1
    SCRAPE_TIMEOUT: float = 20.0  # 응답 없는 사이트에서 크롤이 멈추지 않도록
    SCRAPE_USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_3) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/125.0.0.0 Safari/537.36"
    )

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
