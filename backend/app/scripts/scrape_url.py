# scripts/scrape_url.py
# 운영/디버깅용: API 안 거치고 URL 하나를 바로 크롤해서 JSON 출력
# 사용: python -m app.scripts.scrape_url https://example.com/recipes/chili/ --pages 5 --depth 1
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from app.services.scrape.crawler import scrape_url
from app.services.scrape.errors import InvalidSeedUrl

def _args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Scrape recipes from a URL")
    p.add_argument("url")
    p.add_argument("--pages", type=int, default=None, help="max pages fetched (default: settings)")
    p.add_argument("--depth", type=int, default=None, help="max link depth (default: settings)")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)

async def main(argv: Optional[List[str]] = None) -> int:
    args = _args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        result = await scrape_url(args.url, max_pages=args.pages, max_depth=args.depth)
    except InvalidSeedUrl as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 2

    print(json.dumps(result.model_dump(exclude_none=True), ensure_ascii=False, indent=2))
    return 0

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
