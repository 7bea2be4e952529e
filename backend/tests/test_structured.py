"""JSON-LD Recipe extraction."""

from app.models.schemas import UNTITLED
from app.services.scrape.structured import extract_structured

from conftest import ld_json, page

URL = "https://cooks.example.com/recipes/chili/"

CHILI = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Chili",
    "recipeIngredient": ["beans", "beef"],
    "recipeInstructions": [{"@type": "HowToStep", "text": "cook"}],
}


def test_single_recipe_block():
    recipes = extract_structured(page(ld_json(CHILI)), URL)

    assert len(recipes) == 1
    r = recipes[0]
    assert r.title == "Chili"
    assert r.ingredients == ["beans", "beef"]
    assert r.instructions == ["cook"]
    assert r.url == URL
    assert r.id.startswith("recipe-")


def test_recipe_nested_in_graph_and_main_entity():
    data = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "WebSite", "name": "Cooks"},
            {
                "@type": "WebPage",
                "mainEntity": {**CHILI, "name": "Nested Chili", "@id": URL + "#recipe"},
            },
        ],
    }
    recipes = extract_structured(page(ld_json(data)), URL)

    assert [r.title for r in recipes] == ["Nested Chili"]
    assert recipes[0].id == URL + "#recipe"


def test_top_level_array_and_type_list():
    data = [
        {"@type": "Organization", "name": "Cooks"},
        {**CHILI, "@type": ["Recipe", "NewsArticle"], "name": "Listed"},
    ]
    recipes = extract_structured(page(ld_json(data)), URL)
    assert [r.title for r in recipes] == ["Listed"]


def test_malformed_block_does_not_stop_other_blocks():
    html = page(
        '<script type="application/ld+json">{"@type": "Recipe", "name": </script>'
        + ld_json(CHILI)
    )
    recipes = extract_structured(html, URL)
    assert [r.title for r in recipes] == ["Chili"]


def test_script_type_with_charset_parameter():
    html = page(
        '<script type="application/ld+json; charset=utf-8">'
        '{"@type": "Recipe", "name": "Soup", "recipeIngredient": ["water"]}'
        "</script>"
    )
    assert [r.title for r in extract_structured(html, URL)] == ["Soup"]


def test_field_mapping():
    data = {
        "@type": "Recipe",
        "recipeIngredient": ["1 onion", "  ", "2 cloves garlic"],
        "recipeInstructions": [
            "Chop the onion.",
            {"@type": "HowToStep", "text": "Fry it."},
            "",
            None,
            {
                "@type": "HowToSection",
                "name": "Finish",
                "itemListElement": [{"@type": "HowToStep", "text": "Serve."}],
            },
        ],
        "image": [{"@type": "ImageObject", "url": "/img/chili.jpg"}, "https://cdn.example.com/b.jpg"],
        "totalTime": "PT1H",
        "recipeYield": ["4", "4 servings"],
        "recipeCategory": "Dinner",
        "url": "https://cooks.example.com/recipes/chili/print/",
    }
    (r,) = extract_structured(page(ld_json(data)), URL)

    assert r.title == UNTITLED
    assert r.ingredients == ["1 onion", "2 cloves garlic"]
    assert r.instructions == ["Chop the onion.", "Fry it.", "Serve."]
    assert r.image == "https://cooks.example.com/img/chili.jpg"
    assert r.cookTime == "PT1H"
    assert r.servings == ["4", "4 servings"]
    assert r.mealType == "Dinner"
    assert r.url == "https://cooks.example.com/recipes/chili/print/"


def test_cook_time_preferred_over_total_time_and_image_variants():
    base = {**CHILI, "cookTime": "PT30M", "totalTime": "PT45M"}
    (r,) = extract_structured(page(ld_json({**base, "image": "https://x.example.com/a.jpg"})), URL)
    assert r.cookTime == "PT30M"
    assert r.image == "https://x.example.com/a.jpg"

    (r,) = extract_structured(page(ld_json({**base, "image": {"url": "https://x.example.com/b.jpg"}})), URL)
    assert r.image == "https://x.example.com/b.jpg"

    (r,) = extract_structured(page(ld_json({**base, "image": [{}, "https://x.example.com/c.jpg"]})), URL)
    assert r.image == "https://x.example.com/c.jpg"


def test_ingredients_not_a_list_are_ignored():
    data = {**CHILI, "recipeIngredient": "beans, beef"}
    (r,) = extract_structured(page(ld_json(data)), URL)
    assert r.ingredients == []
    assert r.instructions == ["cook"]


def test_empty_recipe_shell_is_not_emitted():
    data = {"@type": "Recipe", "name": "Teaser", "recipeIngredient": [], "recipeInstructions": []}
    assert extract_structured(page(ld_json(data)), URL) == []


def test_no_structured_data():
    assert extract_structured(page("<h1>Hello</h1>"), URL) == []


def test_extraction_is_repeatable():
    html = page(ld_json([CHILI, {**CHILI, "name": "Chili 2"}]))
    first = extract_structured(html, URL)
    second = extract_structured(html, URL)

    assert [r.model_dump() for r in first] == [r.model_dump() for r in second]
    assert first[0].id != first[1].id
