"""MCP server construction and tool registration."""

from mcp.server.fastmcp import FastMCP

from sparkyfitness_mcp.config import Settings
from sparkyfitness_mcp.services.food_tools import FoodTools

SERVER_NAME = "sparkyfitness-mcp"
SERVER_TITLE = "SparkyFitness MCP Server"
SERVER_VERSION = "0.1.0"

SERVER_INSTRUCTIONS = (
    f"{SERVER_TITLE} v{SERVER_VERSION}. "
    "Tools for managing food nutrition records in SparkyFitness. "
    "Always call search_foods before creating a food so duplicates can be "
    "reused with add_food_variant."
)

SEARCH_FOODS_DESCRIPTION = (
    "Search for foods in the SparkyFitness database by name and optional brand. "
    "Returns matching foods with their default nutrition information."
)

ADD_FOOD_VARIANT_DESCRIPTION = """\
Add a new serving size variant to an EXISTING food in SparkyFitness.

**When to Use:**
- search_foods found a matching food, AND
- the user confirms they want a new serving size on that food rather than a \
separate entry

**What This Does:**
Adds another serving size option to an existing food entry. For example, \
an existing 'Enoki Mushroom' food with a 100g variant can get a 150g variant \
on the SAME food entry.

**Required Input:**
- food_id: UUID from search_foods results
- serving_size: numeric amount (e.g., 100, 1.5)
- serving_unit: unit of measurement (g, ml, cup, piece, oz, etc.)
- core nutrition: calories, protein, carbs, fat
- optional nutrition: fiber, sugar, vitamins, minerals, etc.

**Output:**
- variant_id of the new variant and a confirmation message
"""

CREATE_FOOD_VARIANT_DESCRIPTION = """\
Create a NEW food entry with its default variant in SparkyFitness.

**When to Use:**
Only when search_foods found no matches, or the user explicitly chooses a \
separate entry despite duplicates. To add a serving size to an existing food \
use add_food_variant instead.

**Required Input:**
- name: food name (e.g., 'Organic Quinoa'); brand is optional
- serving_size: numeric amount (e.g., 100, 1)
- serving_unit: unit of measurement (g, ml, cup, piece, oz, etc.)
- core nutrition: calories, protein, carbs, fat
- optional nutrition: fiber, sugar, vitamins, minerals, etc.

**Output:**
- food_id and variant_id of the newly created food, plus a message

If search_foods found existing foods, show them to the user first and ask \
whether to add a variant to one of them or create a new entry.
"""


def build_mcp_server(settings: Settings, tools: FoodTools) -> FastMCP:
    """Create the MCP server and register the food tools."""
    server = FastMCP(
        SERVER_NAME,
        instructions=SERVER_INSTRUCTIONS,
        host=settings.mcp_http_host,
        port=settings.mcp_http_port,
        stateless_http=True,
        streamable_http_path="/",
    )
    server.add_tool(
        tools.search_foods,
        name="search_foods",
        title="Search Foods",
        description=SEARCH_FOODS_DESCRIPTION,
    )
    server.add_tool(
        tools.add_food_variant,
        name="add_food_variant",
        title="Add Variant to Existing Food",
        description=ADD_FOOD_VARIANT_DESCRIPTION,
    )
    server.add_tool(
        tools.create_food_variant,
        name="create_food_variant",
        title="Create New Food Entry",
        description=CREATE_FOOD_VARIANT_DESCRIPTION,
    )
    # FastMCP takes no version argument; the low-level server reports this one.
    server._mcp_server.version = SERVER_VERSION
    return server
