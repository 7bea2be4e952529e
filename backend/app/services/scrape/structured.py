# 목적: 페이지에 박힌 JSON-LD(schema.org Recipe) 블록에서 레시피 추출
# 특징: 최상위 모양을 가정하지 않음. @graph / 배열 / mainEntity 안쪽까지 재귀 탐색
# 주의: 블록 하나가 깨져도 같은 페이지의 다른 블록은 계속 처리한다

from __future__ import annotations
import itertools
import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from app.models.schemas import RecipeRecord, UNTITLED
from app.services.utils import stable_recipe_id

log = logging.getLogger(__name__)

LD_JSON_TYPE = re.compile(r"^\s*application/ld\+json\s*(;.*)?$", re.I)

def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")

def _is_recipe(node: Dict[str, Any]) -> bool:
    t = node.get("@type")
    if isinstance(t, list):
        return "Recipe" in t
    return t == "Recipe"

def _text(v: Any) -> Optional[str]:
    if v is None or isinstance(v, (dict, list)):
        return None
    s = str(v).strip()
    return s or None

# ---------------------------------------------------------------------
# 필드 매핑
# ---------------------------------------------------------------------
def _ingredients(v: Any) -> List[str]:
    if not isinstance(v, list):
        return []
    return [s for s in (_text(x) for x in v) if s]

def _instructions(v: Any) -> List[str]:
    # HowToStep{text} / 문자열 / HowToSection{itemListElement:[...]} 혼용 대응
    if isinstance(v, str):
        return [ln.strip() for ln in v.splitlines() if ln.strip()]
    if not isinstance(v, list):
        return []

    steps: List[str] = []
    for step in v:
        if isinstance(step, dict):
            text = _text(step.get("text"))
            if text:
                steps.append(text)
            elif isinstance(step.get("itemListElement"), list):
                steps.extend(_instructions(step["itemListElement"]))
        else:
            text = _text(step)
            if text:
                steps.append(text)
    return steps

def _image(v: Any, page_url: str) -> Optional[str]:
    # 문자열 URL / {"url": ...} / 둘 중 하나의 배열 → 첫 번째로 풀리는 것
    if isinstance(v, list):
        for item in v:
            found = _image(item, page_url)
            if found:
                return found
        return None
    if isinstance(v, dict):
        v = v.get("url")
    src = _text(v)
    return urljoin(page_url, src) if src else None

def _to_record(node: Dict[str, Any], page_url: str, position: int) -> RecipeRecord:
    title = _text(node.get("name")) or UNTITLED
    rid = _text(node.get("@id")) or stable_recipe_id(page_url, str(position), title)
    url = _text(node.get("url"))
    return RecipeRecord(
        id=rid,
        title=title,
        ingredients=_ingredients(node.get("recipeIngredient")),
        instructions=_instructions(node.get("recipeInstructions")),
        url=urljoin(page_url, url) if url else page_url,
        image=_image(node.get("image"), page_url),
        cookTime=_text(node.get("cookTime")) or _text(node.get("totalTime")),
        servings=node.get("recipeYield") or None,
        mealType=node.get("recipeCategory") or None,
    )

# ---------------------------------------------------------------------
# 재귀 탐색
# ---------------------------------------------------------------------
def _walk(data: Any, page_url: str, found: List[RecipeRecord], counter: Iterator[int]) -> None:
    if isinstance(data, list):
        for item in data:
            _walk(item, page_url, found, counter)
        return
    if not isinstance(data, dict):
        return

    if _is_recipe(data):
        rec = _to_record(data, page_url, next(counter))
        if rec.is_empty():
            log.debug("skip empty recipe shell %r on %s", rec.title, page_url)
        else:
            found.append(rec)

    # Recipe 여부와 상관없이 하위 값 전부 탐색
    for value in data.values():
        if isinstance(value, (dict, list)):
            _walk(value, page_url, found, counter)

def ld_json_blocks(soup: BeautifulSoup) -> List[str]:
    return [s.get_text() for s in soup.find_all("script", attrs={"type": LD_JSON_TYPE})]

def extract_structured(html: str, page_url: str) -> List[RecipeRecord]:
    """JSON-LD Recipe 전부 추출. 빈 껍데기(재료/조리법 둘 다 없음)는 버린다."""
    found: List[RecipeRecord] = []
    counter = itertools.count()  # Recipe 노드 위치 (id 생성용)

    for i, raw in enumerate(ld_json_blocks(_soup(html))):
        if not raw.strip():
            continue
        try:
            data = json.loads(raw, strict=False)
        except ValueError as e:
            log.warning("skip malformed ld+json block #%d on %s: %s", i, page_url, e)
            continue
        _walk(data, page_url, found, counter)

    return found
