"""Tests for the food tool handlers."""

import asyncio

import pytest

from sparkyfitness_mcp.domain.errors import ValidationError
from sparkyfitness_mcp.domain.foods import Food
from sparkyfitness_mcp.services.food_tools import FoodTools
from tests.conftest import StubSparkyFitnessClient, food_payload


def _foods(*payloads: dict[str, object]) -> list[Food]:
    return [Food.model_validate(payload) for payload in payloads]


def test_search_drops_foods_without_default_variant(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    stub_client.foods = _foods(
        food_payload("food-1", "Chicken Breast"),
        food_payload("food-2", "Chicken Thigh", with_variant=False),
        food_payload("food-3", "Chicken Wing"),
    )

    output = asyncio.run(food_tools.search_foods("chicken"))

    assert output.total == 2
    assert output.total == len(output.foods)
    assert [food.food_id for food in output.foods] == ["food-1", "food-3"]
    assert stub_client.search_calls == [("chicken", True, 10)]


def test_search_maps_variant_fields(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    stub_client.foods = _foods(food_payload("food-1", "Chicken Breast", brand="Acme"))

    result = asyncio.run(food_tools.search_foods("chicken")).foods[0]

    assert result.variant_id == "food-1-variant"
    assert result.food_name == "Chicken Breast"
    assert result.brand == "Acme"
    assert result.provider_type == "usda"
    assert result.serving_size == 100
    assert result.serving_unit == "g"
    assert result.calories == 165
    assert result.sodium == 74
    assert result.sugars is None


def test_search_brand_filter_is_exact_and_case_sensitive(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    stub_client.foods = _foods(
        food_payload("food-1", "Peanut Butter", brand="Acme"),
        food_payload("food-2", "Peanut Butter", brand="Other"),
        food_payload("food-3", "Peanut Butter"),
    )

    lower = asyncio.run(food_tools.search_foods("peanut", brand="acme"))
    exact = asyncio.run(food_tools.search_foods("peanut", brand="Acme"))

    assert lower.total == 0
    assert lower.foods == []
    assert [food.food_id for food in exact.foods] == ["food-1"]


def test_search_passes_match_mode_and_limit(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    asyncio.run(
        food_tools.search_foods("rice", brand="Acme", broad_match=False, limit=3)
    )

    assert stub_client.search_calls == [("rice", False, 3)]


@pytest.mark.parametrize("name", ["", "   "])
def test_search_requires_name(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient, name: str
) -> None:
    with pytest.raises(ValidationError, match="name"):
        asyncio.run(food_tools.search_foods(name))

    assert stub_client.call_count == 0


def test_search_rejects_non_positive_limit(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    with pytest.raises(ValidationError, match="limit"):
        asyncio.run(food_tools.search_foods("rice", limit=0))

    assert stub_client.call_count == 0


@pytest.mark.parametrize("serving_size", [0, -5])
def test_add_variant_rejects_non_positive_serving_size(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient, serving_size: float
) -> None:
    with pytest.raises(ValidationError, match="serving_size"):
        asyncio.run(
            food_tools.add_food_variant(
                food_id="food-1",
                serving_size=serving_size,
                serving_unit="g",
                calories=10,
                protein=1,
                carbs=1,
                fat=1,
            )
        )

    assert stub_client.call_count == 0


def test_add_variant_requires_food_id_and_unit(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    with pytest.raises(ValidationError, match="food_id"):
        asyncio.run(
            food_tools.add_food_variant(
                food_id="",
                serving_size=100,
                serving_unit="g",
                calories=10,
                protein=1,
                carbs=1,
                fat=1,
            )
        )
    with pytest.raises(ValidationError, match="serving_unit"):
        asyncio.run(
            food_tools.add_food_variant(
                food_id="food-1",
                serving_size=100,
                serving_unit=" ",
                calories=10,
                protein=1,
                carbs=1,
                fat=1,
            )
        )

    assert stub_client.call_count == 0


def test_add_variant_rejects_negative_nutrient(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    with pytest.raises(ValidationError, match="sodium"):
        asyncio.run(
            food_tools.add_food_variant(
                food_id="food-1",
                serving_size=100,
                serving_unit="g",
                calories=10,
                protein=1,
                carbs=1,
                fat=1,
                sodium=-1,
            )
        )

    assert stub_client.call_count == 0


def test_add_variant_keeps_explicit_zero_and_omits_absent(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    output = asyncio.run(
        food_tools.add_food_variant(
            food_id="food-1",
            serving_size=150,
            serving_unit="g",
            calories=55,
            protein=4,
            carbs=11,
            fat=0.4,
            sugars=0,
            glycemic_index="Low",
        )
    )

    request = stub_client.variant_requests[0]
    payload = request.model_dump(exclude_none=True)
    assert payload["sugars"] == 0
    assert "sodium" not in payload
    assert payload["is_default"] is False
    assert payload["glycemic_index"] == "Low"
    assert output.food_id == "food-1"
    assert output.variant_id == "variant-added"
    assert "variant-added" in output.message


def test_add_variant_can_become_default(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    asyncio.run(
        food_tools.add_food_variant(
            food_id="food-1",
            serving_size=1,
            serving_unit="cup",
            calories=200,
            protein=5,
            carbs=30,
            fat=7,
            is_default=True,
        )
    )

    assert stub_client.variant_requests[0].is_default is True


def test_create_variant_defaults(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    output = asyncio.run(
        food_tools.create_food_variant(
            name="Organic Quinoa",
            brand="Nature's Best",
            serving_size=100,
            serving_unit="g",
            calories=368,
            protein=14,
            carbs=64,
            fat=6,
            iron=4.6,
        )
    )

    request = stub_client.create_requests[0]
    payload = request.model_dump(exclude_none=True)
    assert payload["is_default"] is True
    assert payload["is_custom"] is True
    assert payload["is_quick_food"] is False
    assert payload["glycemic_index"] == "None"
    assert payload["custom_nutrients"] == {}
    assert payload["brand"] == "Nature's Best"
    assert payload["iron"] == 4.6
    assert "calcium" not in payload
    assert output.food_id == "food-new"
    assert output.variant_id == "variant-new"
    assert output.message == (
        "Successfully created new food 'Organic Quinoa (Nature's Best)' "
        "with default variant"
    )


def test_create_variant_first_variant_is_always_default(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    asyncio.run(
        food_tools.create_food_variant(
            name="Tofu",
            serving_size=100,
            serving_unit="g",
            calories=76,
            protein=8,
            carbs=1.9,
            fat=4.8,
            is_default=False,
            is_quick_food=True,
            glycemic_index="Low",
        )
    )

    request = stub_client.create_requests[0]
    assert request.is_default is True
    assert request.is_quick_food is True
    assert request.glycemic_index == "Low"
    assert request.brand == ""


def test_create_variant_validates_before_calling_backend(
    food_tools: FoodTools, stub_client: StubSparkyFitnessClient
) -> None:
    with pytest.raises(ValidationError, match="name"):
        asyncio.run(
            food_tools.create_food_variant(
                name="",
                serving_size=100,
                serving_unit="g",
                calories=1,
                protein=1,
                carbs=1,
                fat=1,
            )
        )
    with pytest.raises(ValidationError, match="serving_size"):
        asyncio.run(
            food_tools.create_food_variant(
                name="Tofu",
                serving_size=0,
                serving_unit="g",
                calories=1,
                protein=1,
                carbs=1,
                fat=1,
            )
        )

    assert stub_client.call_count == 0
