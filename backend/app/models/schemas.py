# app/models/schemas.py
# 스크래핑 파이프라인 입출력 스키마
# RecipeRecord: 추출기 → 크롤러 → 프론트로 나가는 표준 레시피 단위 (camelCase 유지)
# snake_case 변환은 저장 계층(cookbook_store)에서만 한다.
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

UNTITLED = "Untitled Recipe"
NO_RECIPES_MESSAGE = (
    "No structured recipe data found. Try a different URL or add the recipe manually."
)

def _clean_lines(v) -> List[str]:
    # 문자열만 남기고 공백 정리, 빈 줄 제거
    out: List[str] = []
    for x in v or []:
        if not isinstance(x, str):
            continue
        s = " ".join(x.split())
        if s:
            out.append(s)
    return out

class RecipeRecord(BaseModel):
    id: str
    title: str = UNTITLED
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    url: str
    image: Optional[str] = None
    cookTime: Optional[str] = None
    servings: Optional[Any] = None       # recipeYield 그대로 ("4", 4, ["4", "4 servings"] ...)
    mealType: Optional[Any] = None       # recipeCategory 그대로

    @field_validator("title", mode="before")
    @classmethod
    def _v_title(cls, v):
        s = " ".join(str(v).split()) if v is not None else ""
        return s or UNTITLED

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _v_lines(cls, v):
        return _clean_lines(v)

    def is_empty(self) -> bool:
        return not self.ingredients and not self.instructions

# 요청 본문: url 누락/타입 오류는 422 대신 400 {"error"} 로 돌려주려고 느슨하게 받는다
# (검사는 crawler.validate_seed_url)
class ScrapeRequest(BaseModel):
    url: Optional[Any] = None

class ScrapeResponse(BaseModel):
    recipes: List[RecipeRecord] = Field(default_factory=list)
    message: Optional[str] = None

class ErrorResponse(BaseModel):
    error: str

# 스크랩 결과를 쿡북에 담기
class RecipeImportIn(BaseModel):
    cookbookId: Optional[str] = None
    recipes: List[RecipeRecord] = Field(default_factory=list)

class RecipeImportOut(BaseModel):
    ok: bool
    cookbookId: str
    saved: int
    ids: List[str] = Field(default_factory=list)
