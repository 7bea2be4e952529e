# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes()를 await로 호출한다.

from app.db.init import get_db

async def ensure_recipe_indexes(db):
    col = db["recipes"]
    # 같은 쿡북에 같은 출처/제목 레시피는 한 번만 (import 업서트 키와 일치)
    await col.create_index(
        [("cookbook_id", 1), ("url", 1), ("title", 1)],
        unique=True,
        name="cookbook_url_title_1",
    )
    await col.create_index([("owner_id", 1), ("created_at", -1)])
    await col.create_index("meal_type", sparse=True)

async def ensure_indexes():
    db = get_db()
    await ensure_recipe_indexes(db)
