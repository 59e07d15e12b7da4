"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field

import pytest

from sparkyfitness_mcp.adapters.sparkyfitness_client import SparkyFitnessClient
from sparkyfitness_mcp.config import Settings
from sparkyfitness_mcp.domain.foods import (
    AddFoodVariantRequest,
    CreatedFood,
    CreateFoodRequest,
    Food,
)
from sparkyfitness_mcp.services.food_tools import FoodTools

ENV_VARS = (
    "SPARKYFITNESS_API_URL",
    "SPARKYFITNESS_API_KEY",
    "SPARKYFITNESS_AUTH_SCHEME",
    "MCP_TRANSPORT",
    "MCP_HTTP_HOST",
    "MCP_HTTP_PORT",
    "MCP_HTTP_BASIC_AUTH_USER",
    "MCP_HTTP_BASIC_AUTH_PASSWORD",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


def food_payload(
    food_id: str,
    name: str,
    brand: str | None = None,
    with_variant: bool = True,
) -> dict[str, object]:
    """Build a search result entry shaped like the backend response."""
    payload: dict[str, object] = {
        "id": food_id,
        "name": name,
        "brand": brand,
        "is_custom": False,
        "user_id": "user-1",
        "shared_with_public": True,
        "provider_external_id": None,
        "provider_type": "usda",
        "default_variant": None,
    }
    if with_variant:
        payload["default_variant"] = {
            "id": f"{food_id}-variant",
            "serving_size": 100,
            "serving_unit": "g",
            "calories": 165,
            "protein": 31,
            "carbs": 0,
            "fat": 3.6,
            "saturated_fat": 1.0,
            "sodium": "74",
            "is_default": True,
            "glycemic_index": None,
            "custom_nutrients": {},
        }
    return payload


@dataclass
class StubSparkyFitnessClient(SparkyFitnessClient):
    """In-memory SparkyFitness client recording every call."""

    foods: list[Food] = field(default_factory=list)
    created: CreatedFood = field(
        default_factory=lambda: CreatedFood.model_validate(
            {
                "id": "food-new",
                "name": "Organic Quinoa",
                "brand": "Nature's Best",
                "is_custom": True,
                "default_variant": {"id": "variant-new"},
            }
        )
    )
    variant_id: str = "variant-added"
    search_calls: list[tuple[str, bool, int]] = field(default_factory=list)
    create_requests: list[CreateFoodRequest] = field(default_factory=list)
    variant_requests: list[AddFoodVariantRequest] = field(default_factory=list)

    @property
    def call_count(self) -> int:
        return (
            len(self.search_calls)
            + len(self.create_requests)
            + len(self.variant_requests)
        )

    async def search_foods(
        self, name: str, broad_match: bool = True, limit: int = 10
    ) -> list[Food]:
        self.search_calls.append((name, broad_match, limit))
        return list(self.foods)

    async def create_food(self, request: CreateFoodRequest) -> CreatedFood:
        self.create_requests.append(request)
        return self.created

    async def add_food_variant(self, request: AddFoodVariantRequest) -> str:
        self.variant_requests.append(request)
        return self.variant_id


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Isolate tests from the caller's environment and any local .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        sparkyfitness_api_url="https://sparky.test/api",
        sparkyfitness_api_key="test-key",
        _env_file=None,
    )


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("sparkyfitness_mcp.tests")


@pytest.fixture
def stub_client() -> StubSparkyFitnessClient:
    return StubSparkyFitnessClient()


@pytest.fixture
def food_tools(
    stub_client: StubSparkyFitnessClient, logger: logging.Logger
) -> FoodTools:
    return FoodTools(client=stub_client, logger=logger)
