"""Saving scraped recipes into a cookbook."""

import pytest

from app.models.schemas import RecipeRecord
from app.services.cookbook_store import from_row, list_recipes, save_recipes, to_row

from fake_mongo import FakeCollection


def _chili(**kw):
    base = dict(
        id="https://cooks.example.com/chili#recipe",
        title="Chili",
        ingredients=["beans", "beef"],
        instructions=["cook"],
        url="https://cooks.example.com/chili/",
        image="https://cooks.example.com/chili.jpg",
        cookTime="PT1H",
        servings="4",
        mealType="Dinner",
    )
    base.update(kw)
    return RecipeRecord(**base)


def test_row_uses_snake_case_fields():
    row = to_row(_chili(), "cb1", "user1")

    assert row["cook_time"] == "PT1H"
    assert row["meal_type"] == "Dinner"
    assert row["cookbook_id"] == "cb1"
    assert row["owner_id"] == "user1"
    assert row["source_id"] == "https://cooks.example.com/chili#recipe"
    assert "cookTime" not in row and "mealType" not in row


def test_row_round_trips_to_camel_case():
    doc = {"_id": "oid1", **to_row(_chili(), "cb1", "user1")}
    card = from_row(doc)

    assert card["id"] == "oid1"
    assert card["cookTime"] == "PT1H"
    assert card["mealType"] == "Dinner"
    assert card["cookbookId"] == "cb1"


@pytest.mark.asyncio
async def test_saving_same_recipe_twice_upserts():
    col = FakeCollection()
    first = await save_recipes(col, [_chili()], "cb1", "user1")
    second = await save_recipes(col, [_chili(cookTime="PT2H")], "cb1", "user1")

    assert first == second
    assert len(col.docs) == 1
    assert col.docs[0]["cook_time"] == "PT2H"


@pytest.mark.asyncio
async def test_list_filters_by_cookbook_and_owner():
    col = FakeCollection()
    await save_recipes(col, [_chili()], "cb1", "user1")
    await save_recipes(col, [_chili(title="Soup")], "cb2", "user1")
    await save_recipes(col, [_chili(title="Stew")], "cb1", "user2")

    cards = await list_recipes(col, "cb1", owner_id="user1")
    assert [c["title"] for c in cards] == ["Chili"]
