from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.config import create_client_from_env, load_log_level
from sanity_mcp.core.logging import setup_logging
from sanity_mcp.core.registry import register_discovered_tools

SERVER_NAME = "sanity-mcp"


def build_app(client: SanityClient) -> FastMCP:
    app = FastMCP(SERVER_NAME)
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    setup_logging(load_log_level())
    # Fails here, at startup, when SANITY_PROJECT_ID is missing.
    client = create_client_from_env()

    async with client:
        app = build_app(client)
        await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
