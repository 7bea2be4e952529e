# 목적: JSON-LD가 없는 페이지용 폴백. 레시피 플러그인/테마 마크업에서 직접 긁는다
# 방식: 셀렉터 후보를 우선순위대로 시도, 처음으로 결과가 나온 후보 채택
# 확장: 실패 로그 보고 플러그인 셀렉터를 앞쪽에 점진 추가 (WPRM / Tasty / Mediavine ...)

from __future__ import annotations
import logging
import re
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from app.models.schemas import RecipeRecord, UNTITLED
from app.services.utils import stable_recipe_id

log = logging.getLogger(__name__)

TITLE_SELECTORS = [
    ".wprm-recipe-name",
    ".tasty-recipes-title",
    ".mv-create-title",
    "[itemtype*='schema.org/Recipe'] [itemprop='name']",
    "h1.recipe-title",
    ".recipe-title",
    "h1.entry-title",
    "h1",
]

INGREDIENT_SELECTORS = [
    ".wprm-recipe-ingredients",
    ".tasty-recipes-ingredients",
    ".mv-create-ingredients",
    "[itemprop='recipeIngredient']",
    "[itemprop='ingredients']",
    ".recipe-ingredients",
    ".ingredients-list",
    ".ingredients",
]

INSTRUCTION_SELECTORS = [
    ".wprm-recipe-instructions",
    ".tasty-recipes-instructions",
    ".mv-create-instructions",
    "[itemprop='recipeInstructions']",
    ".recipe-instructions",
    ".recipe-method",
    ".instructions",
    ".directions",
]

IMAGE_SELECTORS = [
    ".wprm-recipe-image img",
    ".tasty-recipes-image img",
    "img.mv-create-image",
    ".mv-create-image img",
    "[itemtype*='schema.org/Recipe'] [itemprop='image']",
    ".recipe-image img",
    "img[class*='recipe']",
    "meta[property='og:image']",
]

_WS = re.compile(r"\s+")

def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")

def _clean(t: str) -> str:
    return _WS.sub(" ", (t or "").strip())

def _outermost(nodes: List[Tag]) -> List[Tag]:
    # .ingredients 가 바깥 div 와 안쪽 ul 둘 다 잡히면 바깥 것만 (중복 수집 방지)
    out: List[Tag] = []
    for n in nodes:
        if any(p is o for p in n.parents for o in out):
            continue
        out.append(n)
    return out

def _own_text(item: Tag) -> str:
    # 하위 목록(ul/ol) 텍스트는 빼고 이 항목 자신의 텍스트만. 하위 li 는 따로 한 줄씩 수집된다
    parts: List[str] = []
    for s in item.find_all(string=True):
        nested = False
        for p in s.parents:
            if p is item:
                break
            if p.name in ("ul", "ol"):
                nested = True
                break
        if not nested:
            parts.append(s)
    return _clean(" ".join(parts))

def _items_of(container: Tag) -> List[str]:
    # li → p → 컨테이너 자체 텍스트 줄 순서로 시도
    lis = container.select("li")
    if lis:
        texts = [_own_text(n) for n in lis]
    elif container.select("p"):
        texts = [_clean(n.get_text(" ", strip=True)) for n in container.select("p")]
    else:
        texts = [_clean(ln) for ln in container.get_text("\n").splitlines()]
    return [t for t in texts if t]

def _first_list(soup: BeautifulSoup, selectors: List[str]) -> List[str]:
    for sel in selectors:
        items: List[str] = []
        for container in _outermost(soup.select(sel)):
            items.extend(_items_of(container))
        if items:
            log.debug("heuristic hit %s (%d items)", sel, len(items))
            return items
    return []

def _title(soup: BeautifulSoup) -> str:
    for sel in TITLE_SELECTORS:
        el = soup.select_one(sel)
        if el:
            t = _clean(el.get_text(" ", strip=True))
            if t:
                return t
    og = soup.select_one("meta[property='og:title']")
    if og and _clean(og.get("content", "")):
        return _clean(og["content"])
    if soup.title and _clean(soup.title.get_text()):
        return _clean(soup.title.get_text())
    return UNTITLED

def _pick_src(el: Tag) -> Optional[str]:
    for attr in ("src", "data-src", "data-lazy-src", "content"):
        v = (el.get(attr) or "").strip()
        # 지연로딩 placeholder(data:image/gif...)는 건너뜀
        if v and not v.startswith("data:"):
            return v
    return None

def _image(soup: BeautifulSoup, page_url: str) -> Optional[str]:
    for sel in IMAGE_SELECTORS:
        for el in soup.select(sel):
            src = _pick_src(el)
            if src:
                return urljoin(page_url, src)
    return None

def extract_heuristic(html: str, page_url: str) -> List[RecipeRecord]:
    """셀렉터 기반 추출. 재료/조리법 둘 다 비면 빈 리스트."""
    soup = _soup(html)
    ingredients = _first_list(soup, INGREDIENT_SELECTORS)
    instructions = _first_list(soup, INSTRUCTION_SELECTORS)
    if not ingredients and not instructions:
        return []

    title = _title(soup)
    return [
        RecipeRecord(
            id=stable_recipe_id(page_url, "html", title),
            title=title,
            ingredients=ingredients,
            instructions=instructions,
            url=page_url,
            image=_image(soup, page_url),
        )
    ]
