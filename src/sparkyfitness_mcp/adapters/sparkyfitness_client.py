"""SparkyFitness backend API client."""

import logging
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from sparkyfitness_mcp.domain.errors import APIError
from sparkyfitness_mcp.domain.foods import (
    AddFoodVariantRequest,
    AddFoodVariantResponse,
    CreatedFood,
    CreateFoodRequest,
    Food,
    SearchFoodsResponse,
    to_payload,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SparkyFitnessClient(Protocol):
    """Interface for SparkyFitness food API interactions."""

    async def search_foods(
        self, name: str, broad_match: bool = True, limit: int = 10
    ) -> list[Food]:
        """Search foods by name."""

    async def create_food(self, request: CreateFoodRequest) -> CreatedFood:
        """Create a food together with its default variant."""

    async def add_food_variant(self, request: AddFoodVariantRequest) -> str:
        """Add a variant to an existing food and return the variant id."""


class BearerTokenAuth(httpx.Auth):
    """Send the API key as an Authorization bearer token."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class CookieTokenAuth(httpx.Auth):
    """Send the API key as the `token` session cookie."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Cookie"] = f"token={self.token}"
        yield request


def build_auth(scheme: str, api_key: str) -> httpx.Auth:
    """Return the auth strategy for the configured scheme."""
    if scheme == "cookie":
        return CookieTokenAuth(api_key)
    return BearerTokenAuth(api_key)


@dataclass
class HttpxSparkyFitnessClient(SparkyFitnessClient):
    """HTTPX-backed SparkyFitness client."""

    base_url: str
    http_client: httpx.AsyncClient
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__)
    )

    @classmethod
    def create(
        cls,
        base_url: str,
        api_key: str,
        auth_scheme: str = "bearer",
        logger: logging.Logger | None = None,
    ) -> "HttpxSparkyFitnessClient":
        """Create a client with a managed, authenticated httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(auth=build_auth(auth_scheme, api_key)),
            logger=logger or logging.getLogger(__name__),
        )

    async def search_foods(
        self, name: str, broad_match: bool = True, limit: int = 10
    ) -> list[Food]:
        """Search foods by name.

        The backend treats broadMatch and exactMatch as mutually exclusive,
        so exactly one of them is sent.
        """
        params: dict[str, str | int] = {"name": name}
        if broad_match:
            params["broadMatch"] = "true"
        else:
            params["exactMatch"] = "true"
        params["limit"] = limit
        response = await self._send("GET", "/foods", params=params)
        parsed = self._parse(response, SearchFoodsResponse, expected_status=200)
        return parsed.search_results

    async def create_food(self, request: CreateFoodRequest) -> CreatedFood:
        """Create a food with its first variant via POST /foods."""
        response = await self._send("POST", "/foods", json=to_payload(request))
        return self._parse(response, CreatedFood, expected_status=201)

    async def add_food_variant(self, request: AddFoodVariantRequest) -> str:
        """Add a variant via POST /foods/food-variants."""
        response = await self._send(
            "POST", "/foods/food-variants", json=to_payload(request)
        )
        parsed = self._parse(response, AddFoodVariantResponse, expected_status=201)
        return parsed.id

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _send(self, method: str, path: str, **kwargs: object) -> httpx.Response:
        url = f"{self.base_url}{path}"
        self.logger.debug("SparkyFitness request: %s %s", method, path)
        try:
            return await self.http_client.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            self.logger.warning("SparkyFitness %s %s failed: %s", method, path, exc)
            raise APIError("failed to execute request", None, str(exc)) from exc

    def _parse(
        self,
        response: httpx.Response,
        model: type[ModelT],
        *,
        expected_status: int,
    ) -> ModelT:
        if response.status_code != expected_status:
            self.logger.warning(
                "SparkyFitness %s %s returned status=%s",
                response.request.method,
                response.request.url.path,
                response.status_code,
            )
            raise APIError(
                "unexpected status code", response.status_code, response.text
            )
        try:
            return model.model_validate_json(response.content)
        except PydanticValidationError as exc:
            raise APIError(
                "failed to parse response", response.status_code, response.text
            ) from exc
