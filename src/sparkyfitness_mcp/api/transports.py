"""Transport loops for stdio and streamable HTTP."""

import asyncio
import contextlib
import logging
import os
import signal
import socket
import sys
import threading

import uvicorn
from anyio import AsyncFile
from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP
from mcp.server.stdio import stdio_server

from sparkyfitness_mcp.domain.errors import TransportError

SHUTDOWN_GRACE_SECONDS = 5
STDIN_READ_SIZE = 65536


class StdinLines:
    """Async iterator over lines of a file descriptor, read on a daemon thread.

    A pending read blocks neither task cancellation nor interpreter exit.
    """

    def __init__(self, fd: int | None = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._lines: asyncio.Queue[str | None] = asyncio.Queue()
        self._reader: threading.Thread | None = None

    def __aiter__(self) -> "StdinLines":
        if self._reader is None:
            self._reader = threading.Thread(
                target=self._read,
                args=(asyncio.get_running_loop(),),
                name="stdin-reader",
                daemon=True,
            )
            self._reader.start()
        return self

    async def __anext__(self) -> str:
        line = await self._lines.get()
        if line is None:
            raise StopAsyncIteration
        return line

    def _read(self, loop: asyncio.AbstractEventLoop) -> None:
        buffered = b""
        while True:
            try:
                chunk = os.read(self.fd, STDIN_READ_SIZE)
            except OSError:
                chunk = b""
            if not chunk:
                break
            *complete, buffered = (buffered + chunk).split(b"\n")
            for line in complete:
                if not self._deliver(loop, line + b"\n"):
                    return
        if buffered:
            self._deliver(loop, buffered)
        self._deliver(loop, None)

    def _deliver(self, loop: asyncio.AbstractEventLoop, line: bytes | None) -> bool:
        text = None if line is None else line.decode("utf-8", errors="replace")
        try:
            loop.call_soon_threadsafe(self._lines.put_nowait, text)
        except RuntimeError:
            # Event loop already closed.
            return False
        return True


async def _serve_stdio(
    mcp_server: FastMCP, stdin: StdinLines, stdout: AsyncFile[str] | None
) -> None:
    server = mcp_server._mcp_server
    async with stdio_server(stdin=stdin, stdout=stdout) as streams:
        read_stream, write_stream = streams
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


async def run_stdio(
    mcp_server: FastMCP,
    logger: logging.Logger,
    stdin: StdinLines | None = None,
    stdout: AsyncFile[str] | None = None,
) -> None:
    """Serve MCP over stdin/stdout until the input closes or a signal arrives."""
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is unavailable on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    logger.info("Starting MCP server (stdio)")
    serving = asyncio.create_task(
        _serve_stdio(mcp_server, stdin or StdinLines(), stdout)
    )
    stopping = asyncio.create_task(stop.wait())
    try:
        await asyncio.wait({serving, stopping}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(sig)
        serving.cancel()
        stopping.cancel()
        await asyncio.wait({serving, stopping})

    if stop.is_set():
        logger.info("Received shutdown signal")
        return
    try:
        serving.result()
    except OSError as exc:
        raise TransportError(f"stdio server error: {exc}") from exc


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket up front so bind failures surface as errors."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    try:
        return socket.create_server((host, port), family=family)
    except OSError as exc:
        raise TransportError(f"failed to bind {host}:{port}: {exc}") from exc


async def run_http(
    app: FastAPI, host: str, port: int, logger: logging.Logger
) -> None:
    """Serve the HTTP app until SIGINT/SIGTERM, then shut down gracefully."""
    sock = bind_socket(host, port)
    config = uvicorn.Config(
        app,
        log_config=None,
        timeout_graceful_shutdown=SHUTDOWN_GRACE_SECONDS,
    )
    server = uvicorn.Server(config)
    logger.info("Starting MCP server (HTTP) on http://%s:%s", host, port)
    logger.info("MCP endpoint: http://%s:%s/mcp/", host, port)
    try:
        await server.serve(sockets=[sock])
    finally:
        logger.info("Shutting down HTTP server")
        sock.close()
