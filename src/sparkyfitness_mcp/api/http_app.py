"""FastAPI application serving MCP over streamable HTTP."""

import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from mcp.server.fastmcp import FastMCP
from starlette.types import ASGIApp, Receive, Scope, Send

from sparkyfitness_mcp.config import Settings

BASIC_AUTH_REALM = "MCP Server"


class BasicAuthGuard:
    """ASGI wrapper enforcing HTTP basic authentication."""

    def __init__(self, app: ASGIApp, username: str, password: str) -> None:
        self.app = app
        self.username = username
        self.password = password
        self.security = HTTPBasic(realm=BASIC_AUTH_REALM)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        try:
            credentials = await self.security(Request(scope))
        except HTTPException:
            credentials = None
        if credentials is not None and self._matches(credentials):
            await self.app(scope, receive, send)
            return
        response = PlainTextResponse(
            "Unauthorized\n",
            status_code=401,
            headers={"WWW-Authenticate": f'Basic realm="{BASIC_AUTH_REALM}"'},
        )
        await response(scope, receive, send)

    def _matches(self, credentials: HTTPBasicCredentials) -> bool:
        user_ok = secrets.compare_digest(
            credentials.username.encode(), self.username.encode()
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode(), self.password.encode()
        )
        return user_ok and password_ok


def create_http_app(
    settings: Settings, mcp_server: FastMCP, logger: logging.Logger
) -> FastAPI:
    """Create the HTTP app exposing /health and the MCP endpoint under /mcp/."""
    mcp_app: ASGIApp = mcp_server.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with mcp_server.session_manager.run():
            yield

    app = FastAPI(lifespan=lifespan)

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        """Liveness probe, never authenticated."""
        return "OK"

    if settings.basic_auth_enabled:
        logger.info("HTTP Basic Authentication: enabled")
        mcp_app = BasicAuthGuard(
            mcp_app,
            username=settings.mcp_http_basic_auth_user or "",
            password=settings.mcp_http_basic_auth_password or "",
        )
    else:
        logger.info("HTTP Basic Authentication: disabled")
    app.mount("/mcp", mcp_app)
    return app
