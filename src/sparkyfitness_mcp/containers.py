"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from sparkyfitness_mcp.adapters.sparkyfitness_client import (
    HttpxSparkyFitnessClient,
    SparkyFitnessClient,
)
from sparkyfitness_mcp.api.mcp_server import build_mcp_server
from sparkyfitness_mcp.config import Settings
from sparkyfitness_mcp.services.food_tools import FoodTools


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    logger: logging.Logger
    sparkyfitness_client: SparkyFitnessClient
    food_tools: FoodTools
    mcp_server: FastMCP
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings, logger: logging.Logger) -> AppContainer:
    """Create the default dependency container."""
    client = HttpxSparkyFitnessClient.create(
        base_url=settings.sparkyfitness_api_url,
        api_key=settings.sparkyfitness_api_key,
        auth_scheme=settings.sparkyfitness_auth_scheme,
        logger=logger.getChild("client"),
    )
    food_tools = FoodTools(client=client, logger=logger.getChild("tools"))
    mcp_server = build_mcp_server(settings, food_tools)

    async def close_resources() -> None:
        await client.close()

    return AppContainer(
        settings=settings,
        logger=logger,
        sparkyfitness_client=client,
        food_tools=food_tools,
        mcp_server=mcp_server,
        close_resources=close_resources,
    )
