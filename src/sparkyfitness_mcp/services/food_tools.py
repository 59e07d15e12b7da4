"""Food tool handlers backed by the SparkyFitness client."""

import logging
from dataclasses import dataclass, field
from typing import Annotated

from pydantic import Field

from sparkyfitness_mcp.adapters.sparkyfitness_client import SparkyFitnessClient
from sparkyfitness_mcp.api.tool_models import (
    AddFoodVariantOutput,
    CreateFoodOutput,
    FoodResult,
    SearchFoodsOutput,
)
from sparkyfitness_mcp.domain.errors import ValidationError
from sparkyfitness_mcp.domain.foods import (
    AddFoodVariantRequest,
    CreateFoodRequest,
    Food,
    FoodVariant,
)

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_GLYCEMIC_INDEX = "None"

ServingSize = Annotated[
    float, Field(description="Numeric serving size amount (e.g., 100, 1)")
]
ServingUnit = Annotated[
    str, Field(description="Unit of measurement (e.g., g, ml, cup, piece)")
]
Calories = Annotated[float, Field(description="Calories per serving")]
Protein = Annotated[float, Field(description="Protein in grams")]
Carbs = Annotated[float, Field(description="Carbohydrates in grams")]
Fat = Annotated[float, Field(description="Fat in grams")]
SaturatedFat = Annotated[float | None, Field(description="Saturated fat in grams")]
PolyunsaturatedFat = Annotated[
    float | None, Field(description="Polyunsaturated fat in grams")
]
MonounsaturatedFat = Annotated[
    float | None, Field(description="Monounsaturated fat in grams")
]
TransFat = Annotated[float | None, Field(description="Trans fat in grams")]
Cholesterol = Annotated[float | None, Field(description="Cholesterol in milligrams")]
Sodium = Annotated[float | None, Field(description="Sodium in milligrams")]
Potassium = Annotated[float | None, Field(description="Potassium in milligrams")]
DietaryFiber = Annotated[float | None, Field(description="Dietary fiber in grams")]
Sugars = Annotated[float | None, Field(description="Sugars in grams")]
VitaminA = Annotated[float | None, Field(description="Vitamin A")]
VitaminC = Annotated[float | None, Field(description="Vitamin C")]
Calcium = Annotated[float | None, Field(description="Calcium")]
Iron = Annotated[float | None, Field(description="Iron")]
GlycemicIndex = Annotated[str | None, Field(description="Glycemic index if available")]


@dataclass
class FoodTools:
    """MCP tool handlers for searching and extending SparkyFitness foods."""

    client: SparkyFitnessClient
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__)
    )

    async def search_foods(
        self,
        name: Annotated[str, Field(description="Food name to search for")],
        brand: Annotated[
            str | None,
            Field(description="Optional brand name to filter results (exact match)"),
        ] = None,
        broad_match: Annotated[
            bool,
            Field(description="If true, performs broad match search (default: true)"),
        ] = True,
        limit: Annotated[
            int,
            Field(description="Maximum number of results to return (default: 10)"),
        ] = DEFAULT_SEARCH_LIMIT,
    ) -> SearchFoodsOutput:
        """Search foods by name and optional brand."""
        if not name or not name.strip():
            raise ValidationError("name parameter is required")
        if limit <= 0:
            raise ValidationError("limit must be greater than 0")

        foods = await self.client.search_foods(
            name, broad_match=broad_match, limit=limit
        )
        # The backend has no brand filter; match it here, case-sensitively.
        if brand:
            foods = [food for food in foods if food.brand == brand]

        results = [
            _to_food_result(food, food.default_variant)
            for food in foods
            if food.default_variant is not None
        ]
        self.logger.info(
            "search_foods: name=%s brand=%s results=%s", name, brand, len(results)
        )
        return SearchFoodsOutput(foods=results, total=len(results))

    async def add_food_variant(  # noqa: PLR0913
        self,
        food_id: Annotated[
            str,
            Field(
                description=(
                    "Unique identifier of the existing food (from search_foods results)"
                )
            ),
        ],
        serving_size: ServingSize,
        serving_unit: ServingUnit,
        calories: Calories,
        protein: Protein,
        carbs: Carbs,
        fat: Fat,
        saturated_fat: SaturatedFat = None,
        polyunsaturated_fat: PolyunsaturatedFat = None,
        monounsaturated_fat: MonounsaturatedFat = None,
        trans_fat: TransFat = None,
        cholesterol: Cholesterol = None,
        sodium: Sodium = None,
        potassium: Potassium = None,
        dietary_fiber: DietaryFiber = None,
        sugars: Sugars = None,
        vitamin_a: VitaminA = None,
        vitamin_c: VitaminC = None,
        calcium: Calcium = None,
        iron: Iron = None,
        is_default: Annotated[
            bool | None,
            Field(
                description=(
                    "Set this variant as the food's default variant (default: false)"
                )
            ),
        ] = None,
        glycemic_index: GlycemicIndex = None,
    ) -> AddFoodVariantOutput:
        """Add a serving-size variant to an existing food."""
        if not food_id or not food_id.strip():
            raise ValidationError("food_id parameter is required")
        nutrients = {
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
            "saturated_fat": saturated_fat,
            "polyunsaturated_fat": polyunsaturated_fat,
            "monounsaturated_fat": monounsaturated_fat,
            "trans_fat": trans_fat,
            "cholesterol": cholesterol,
            "sodium": sodium,
            "potassium": potassium,
            "dietary_fiber": dietary_fiber,
            "sugars": sugars,
            "vitamin_a": vitamin_a,
            "vitamin_c": vitamin_c,
            "calcium": calcium,
            "iron": iron,
        }
        _validate_serving(serving_size, serving_unit, nutrients)

        request = AddFoodVariantRequest(
            food_id=food_id,
            serving_size=serving_size,
            serving_unit=serving_unit,
            is_default=bool(is_default),
            glycemic_index=glycemic_index,
            **nutrients,
        )
        variant_id = await self.client.add_food_variant(request)
        self.logger.info(
            "add_food_variant: food_id=%s variant_id=%s", food_id, variant_id
        )
        return AddFoodVariantOutput(
            food_id=food_id,
            variant_id=variant_id,
            message=(
                "Successfully added variant to existing food "
                f"(variant ID: {variant_id})"
            ),
        )

    async def create_food_variant(  # noqa: PLR0913
        self,
        name: Annotated[str, Field(description="Food name")],
        serving_size: ServingSize,
        serving_unit: ServingUnit,
        calories: Calories,
        protein: Protein,
        carbs: Carbs,
        fat: Fat,
        brand: Annotated[str | None, Field(description="Brand name (optional)")] = None,
        saturated_fat: SaturatedFat = None,
        polyunsaturated_fat: PolyunsaturatedFat = None,
        monounsaturated_fat: MonounsaturatedFat = None,
        trans_fat: TransFat = None,
        cholesterol: Cholesterol = None,
        sodium: Sodium = None,
        potassium: Potassium = None,
        dietary_fiber: DietaryFiber = None,
        sugars: Sugars = None,
        vitamin_a: VitaminA = None,
        vitamin_c: VitaminC = None,
        calcium: Calcium = None,
        iron: Iron = None,
        is_quick_food: Annotated[
            bool | None, Field(description="Mark as quick food (default: false)")
        ] = None,
        is_default: Annotated[
            bool | None,
            Field(
                description=(
                    "Set this variant as default (always true for the first variant)"
                )
            ),
        ] = None,
        glycemic_index: GlycemicIndex = None,
    ) -> CreateFoodOutput:
        """Create a new custom food with its default variant."""
        if not name or not name.strip():
            raise ValidationError("name parameter is required")
        nutrients = {
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
            "saturated_fat": saturated_fat,
            "polyunsaturated_fat": polyunsaturated_fat,
            "monounsaturated_fat": monounsaturated_fat,
            "trans_fat": trans_fat,
            "cholesterol": cholesterol,
            "sodium": sodium,
            "potassium": potassium,
            "dietary_fiber": dietary_fiber,
            "sugars": sugars,
            "vitamin_a": vitamin_a,
            "vitamin_c": vitamin_c,
            "calcium": calcium,
            "iron": iron,
        }
        _validate_serving(serving_size, serving_unit, nutrients)
        if is_default is False:
            self.logger.debug("create_food_variant: ignoring is_default=false")

        request = CreateFoodRequest(
            name=name,
            brand=brand or "",
            is_custom=True,
            is_quick_food=bool(is_quick_food),
            serving_size=serving_size,
            serving_unit=serving_unit,
            is_default=True,
            glycemic_index=glycemic_index or DEFAULT_GLYCEMIC_INDEX,
            **nutrients,
        )
        created = await self.client.create_food(request)
        food_name = created.name
        if created.brand:
            food_name = f"{created.name} ({created.brand})"
        self.logger.info(
            "create_food_variant: food_id=%s variant_id=%s",
            created.id,
            created.default_variant.id,
        )
        return CreateFoodOutput(
            food_id=created.id,
            variant_id=created.default_variant.id,
            message=f"Successfully created new food '{food_name}' with default variant",
        )


def _validate_serving(
    serving_size: float, serving_unit: str, nutrients: dict[str, float | None]
) -> None:
    """Validate serving and nutrient values shared by the variant tools."""
    if serving_size <= 0:
        raise ValidationError("serving_size must be greater than 0")
    if not serving_unit or not serving_unit.strip():
        raise ValidationError("serving_unit parameter is required")
    for nutrient, value in nutrients.items():
        if value is not None and value < 0:
            raise ValidationError(f"{nutrient} must not be negative")


def _to_food_result(food: Food, variant: FoodVariant) -> FoodResult:
    """Flatten a food and its default variant into a tool result."""
    return FoodResult(
        food_id=food.id,
        food_name=food.name,
        brand=food.brand,
        is_custom=food.is_custom,
        provider_type=food.provider_type,
        variant_id=variant.id,
        serving_size=variant.serving_size,
        serving_unit=variant.serving_unit,
        calories=variant.calories,
        protein=variant.protein,
        carbs=variant.carbs,
        fat=variant.fat,
        saturated_fat=variant.saturated_fat,
        dietary_fiber=variant.dietary_fiber,
        sugars=variant.sugars,
        sodium=variant.sodium,
        cholesterol=variant.cholesterol,
        potassium=variant.potassium,
        vitamin_a=variant.vitamin_a,
        vitamin_c=variant.vitamin_c,
        calcium=variant.calcium,
        iron=variant.iron,
        glycemic_index=variant.glycemic_index,
    )
