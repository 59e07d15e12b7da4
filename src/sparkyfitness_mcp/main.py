"""Process entrypoint for the SparkyFitness MCP server."""

import asyncio
import signal
import sys
from types import FrameType

from sparkyfitness_mcp.api.http_app import create_http_app
from sparkyfitness_mcp.api.transports import run_http, run_stdio
from sparkyfitness_mcp.app_logging import configure_logging
from sparkyfitness_mcp.config import load_settings
from sparkyfitness_mcp.containers import AppContainer, build_container
from sparkyfitness_mcp.domain.errors import ConfigError, TransportError


async def run(container: AppContainer) -> None:
    """Run the configured transport and release resources afterwards."""
    settings = container.settings
    logger = container.logger
    try:
        if settings.mcp_transport == "http":
            app = create_http_app(settings, container.mcp_server, logger)
            await run_http(
                app, settings.mcp_http_host, settings.mcp_http_port, logger
            )
        else:
            await run_stdio(container.mcp_server, logger)
    finally:
        await container.close_resources()


def _interrupt(signum: int, frame: FrameType | None) -> None:
    """Treat SIGTERM like Ctrl+C so shutdown follows the same path."""
    raise KeyboardInterrupt


def main() -> None:
    """Load configuration, start the server and exit with a status code."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: failed to load configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    logger = configure_logging(settings.log_level, settings.log_format)
    logger.info(
        "Starting SparkyFitness MCP Server: transport=%s log_level=%s log_format=%s",
        settings.mcp_transport,
        settings.log_level,
        settings.log_format,
    )
    container = build_container(settings, logger)
    signal.signal(signal.SIGTERM, _interrupt)
    try:
        asyncio.run(run(container))
    except TransportError as exc:
        logger.error("Server error: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    logger.info("Server stopped gracefully")


if __name__ == "__main__":
    main()
