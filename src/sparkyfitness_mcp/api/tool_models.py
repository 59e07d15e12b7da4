"""Pydantic models describing MCP tool outputs."""

from pydantic import BaseModel, Field


class FoodResult(BaseModel):
    """A food with its default variant, as returned by search_foods."""

    food_id: str = Field(description="Unique identifier of the food")
    food_name: str = Field(description="Name of the food")
    brand: str | None = Field(default=None, description="Brand name if available")
    is_custom: bool = Field(description="Whether this is a custom food")
    provider_type: str | None = Field(
        default=None, description="Provider type (e.g., usda, nutritionix)"
    )
    variant_id: str = Field(description="Unique identifier of the default variant")
    serving_size: float | None = Field(default=None, description="Serving size amount")
    serving_unit: str | None = Field(
        default=None, description="Unit of measurement for serving"
    )
    calories: float | None = Field(default=None, description="Calories per serving")
    protein: float | None = Field(default=None, description="Protein in grams")
    carbs: float | None = Field(default=None, description="Carbohydrates in grams")
    fat: float | None = Field(default=None, description="Fat in grams")
    saturated_fat: float | None = Field(
        default=None, description="Saturated fat in grams"
    )
    dietary_fiber: float | None = Field(
        default=None, description="Dietary fiber in grams"
    )
    sugars: float | None = Field(default=None, description="Sugars in grams")
    sodium: float | None = Field(default=None, description="Sodium in milligrams")
    cholesterol: float | None = Field(
        default=None, description="Cholesterol in milligrams"
    )
    potassium: float | None = Field(default=None, description="Potassium in milligrams")
    vitamin_a: float | None = Field(default=None, description="Vitamin A")
    vitamin_c: float | None = Field(default=None, description="Vitamin C")
    calcium: float | None = Field(default=None, description="Calcium")
    iron: float | None = Field(default=None, description="Iron")
    glycemic_index: str | None = Field(
        default=None, description="Glycemic index if available"
    )


class SearchFoodsOutput(BaseModel):
    """Output of the search_foods tool."""

    foods: list[FoodResult] = Field(
        description="List of matching foods with their default variants"
    )
    total: int = Field(description="Total number of foods returned")


class AddFoodVariantOutput(BaseModel):
    """Output of the add_food_variant tool."""

    food_id: str = Field(description="ID of the food this variant was added to")
    variant_id: str = Field(description="ID of the newly created variant")
    message: str = Field(description="Success message")


class CreateFoodOutput(BaseModel):
    """Output of the create_food_variant tool."""

    food_id: str = Field(description="ID of the created food")
    variant_id: str = Field(description="ID of the created variant")
    message: str = Field(description="Success message")
