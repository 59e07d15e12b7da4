"""Pydantic models for SparkyFitness food payloads."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _BackendModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NutrientValues(_BackendModel):
    """Nutrient amounts per serving; optional values stay None when unknown."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    polyunsaturated_fat: float | None = None
    monounsaturated_fat: float | None = None
    trans_fat: float | None = None
    cholesterol: float | None = None
    sodium: float | None = None
    potassium: float | None = None
    dietary_fiber: float | None = None
    sugars: float | None = None
    vitamin_a: float | None = None
    vitamin_c: float | None = None
    calcium: float | None = None
    iron: float | None = None


class FoodVariant(NutrientValues):
    """A serving-size specific nutrition profile of a food."""

    id: str
    food_id: str | None = None
    serving_size: float | None = None
    serving_unit: str | None = None
    is_default: bool = False
    glycemic_index: str | None = None
    custom_nutrients: dict[str, object] | None = None


class Food(_BackendModel):
    """A food entry as returned by the search endpoint."""

    id: str
    name: str
    brand: str | None = None
    is_custom: bool = False
    user_id: str | None = None
    shared_with_public: bool = False
    provider_external_id: str | None = None
    provider_type: str | None = None
    default_variant: FoodVariant | None = None


class SearchFoodsResponse(_BackendModel):
    """Response body of GET /foods."""

    search_results: list[Food] = Field(default_factory=list, alias="searchResults")

    @field_validator("search_results", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class AddFoodVariantRequest(NutrientValues):
    """Request body of POST /foods/food-variants."""

    food_id: str
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    is_default: bool = False
    glycemic_index: str | None = None
    custom_nutrients: dict[str, object] | None = None


class AddFoodVariantResponse(_BackendModel):
    """Response body of POST /foods/food-variants."""

    id: str


class CreateFoodRequest(NutrientValues):
    """Request body of POST /foods, creating a food with its first variant."""

    name: str
    brand: str = ""
    is_custom: bool = True
    is_quick_food: bool = False
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    is_default: bool = True
    glycemic_index: str = "None"
    custom_nutrients: dict[str, object] = Field(default_factory=dict)


class CreatedVariantRef(_BackendModel):
    """Nested variant reference in the create food response."""

    id: str


class CreatedFood(_BackendModel):
    """Response body of POST /foods."""

    id: str
    name: str
    brand: str | None = None
    is_custom: bool = True
    user_id: str | None = None
    default_variant: CreatedVariantRef


def to_payload(request: BaseModel) -> dict[str, object]:
    """Serialize a request model, omitting fields that were not provided."""
    return request.model_dump(mode="json", exclude_none=True)
