# app/api/routes_recipes.py
# 스크랩 결과 중 사용자가 고른 레시피를 쿡북에 담기 / 쿡북 레시피 조회
# 저장 스키마 변환(camel → snake)은 cookbook_store 에서 처리

from __future__ import annotations
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.deps import get_owner_id
from app.db.init import DatabaseNotReady, get_db
from app.models.schemas import RecipeImportIn, RecipeImportOut
from app.services.cookbook_store import list_recipes, save_recipes

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])

def _recipes_collection():
    try:
        return get_db()["recipes"]
    except DatabaseNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.post("/import", response_model=RecipeImportOut)
async def import_recipes(body: RecipeImportIn, owner_id: str = Depends(get_owner_id)):
    cookbook_id = (body.cookbookId or "").strip()
    if not cookbook_id:
        raise HTTPException(status_code=400, detail="Cookbook Required: please select a cookbook.")
    if not body.recipes:
        raise HTTPException(status_code=400, detail="No recipes selected.")

    col = _recipes_collection()
    try:
        ids = await save_recipes(col, body.recipes, cookbook_id, owner_id)
    except Exception as e:
        log.exception("import into cookbook %s failed", cookbook_id)
        raise HTTPException(status_code=500, detail=str(e))

    log.info("imported %d recipe(s) into cookbook %s", len(ids), cookbook_id)
    return RecipeImportOut(ok=True, cookbookId=cookbook_id, saved=len(ids), ids=ids)

@router.get("")
async def get_cookbook_recipes(
    cookbookId: str = Query(..., min_length=1),
    limit: int = Query(100, ge=1, le=500),
    owner_id: str = Depends(get_owner_id),
) -> Dict[str, List[Dict[str, Any]]]:
    col = _recipes_collection()
    return {"recipes": await list_recipes(col, cookbookId, owner_id=owner_id, limit=limit)}
