# app/services/utils.py
# 재료/제목 비교용 정규화 유틸
# - 장보기 목록 합산과 같은 규칙: 소문자 + 앞뒤 공백 제거 (+ 내부 공백 1칸으로)
# - 크롤 중복 판정과 레시피 id 생성에서 같이 쓴다

from __future__ import annotations
import hashlib
import re
from typing import Iterable, List

_WS = re.compile(r"\s+")

def normalize_key(text: str) -> str:
    return _WS.sub(" ", (text or "").strip().lower())

def normalize_many(items: Iterable[str]) -> List[str]:
    # 순서 무관 비교용: 정규화 → 빈 값 제거 → 정렬 (중복은 유지)
    return sorted(k for k in (normalize_key(x) for x in items if isinstance(x, str)) if k)

def stable_recipe_id(*parts: str) -> str:
    # 같은 페이지/같은 위치면 항상 같은 id (추출 결과 재현성)
    raw = "\x1f".join(p or "" for p in parts)
    return "recipe-" + hashlib.sha1(raw.encode("utf-8")).hexdigest()[:12]
