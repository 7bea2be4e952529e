# 목적: 스크랩한 레시피를 쿡북에 저장/조회 (스크래핑 파이프라인 바깥의 협력 계층)
# 규칙: 파이프라인은 camelCase(cookTime, mealType), 저장 문서는 snake_case(cook_time, meal_type)
# 업서트 키: (cookbook_id, url, title) → 같은 레시피를 두 번 담아도 한 건

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorCollection

from app.models.schemas import RecipeRecord

def to_row(rec: RecipeRecord, cookbook_id: str, owner_id: str) -> Dict[str, Any]:
    return {
        "source_id": rec.id,
        "title": rec.title,
        "ingredients": list(rec.ingredients),
        "instructions": list(rec.instructions),
        "url": rec.url,
        "image": rec.image,
        "cook_time": rec.cookTime,
        "servings": rec.servings,
        "meal_type": rec.mealType,
        "cookbook_id": cookbook_id,
        "owner_id": owner_id,
    }

def from_row(doc: Mapping[str, Any]) -> Dict[str, Any]:
    # 저장 문서 → 프론트 카드(camelCase)
    return {
        "id": str(doc.get("_id") or doc.get("source_id") or ""),
        "title": doc.get("title", ""),
        "ingredients": doc.get("ingredients") or [],
        "instructions": doc.get("instructions") or [],
        "url": doc.get("url", ""),
        "image": doc.get("image"),
        "cookTime": doc.get("cook_time"),
        "servings": doc.get("servings"),
        "mealType": doc.get("meal_type"),
        "cookbookId": doc.get("cookbook_id"),
    }

async def save_recipe(col: AsyncIOMotorCollection, rec: RecipeRecord, cookbook_id: str, owner_id: str) -> str:
    row = to_row(rec, cookbook_id, owner_id)
    key = {"cookbook_id": cookbook_id, "url": row["url"], "title": row["title"]}
    now = datetime.now(timezone.utc)
    res = await col.update_one(
        key,
        {"$set": {**row, "updated_at": now}, "$setOnInsert": {"created_at": now}},
        upsert=True,
    )
    rid = res.upserted_id
    if not rid:
        one = await col.find_one(key, {"_id": 1})
        rid = one and one["_id"]
    return str(rid)

async def save_recipes(
    col: AsyncIOMotorCollection,
    recipes: List[RecipeRecord],
    cookbook_id: str,
    owner_id: str,
) -> List[str]:
    return [await save_recipe(col, rec, cookbook_id, owner_id) for rec in recipes]

async def list_recipes(
    col: AsyncIOMotorCollection,
    cookbook_id: str,
    owner_id: Optional[str] = None,
    limit: int = 100,
) -> List[Dict[str, Any]]:
    q: Dict[str, Any] = {"cookbook_id": cookbook_id}
    if owner_id:
        q["owner_id"] = owner_id
    docs = await col.find(q).sort("created_at", -1).limit(limit).to_list(length=limit)
    return [from_row(d) for d in docs]
