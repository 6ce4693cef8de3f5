# src/workast_mcp/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then serves the Workast tools over the
configured MCP transport (stdio by default) until the client disconnects.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from ..cli.bootstrap import close_state, create_initial_state
from ..config import get_settings
from ..connectors.mcp_connector import build_server
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _serve(state, transport: str) -> None:
    server = build_server(state)
    try:
        if transport == "sse":
            await server.run_sse_async()
        elif transport == "streamable-http":
            await server.run_streamable_http_async()
        else:
            await server.run_stdio_async()
    finally:
        await close_state(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = settings.data_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    # keep noisy libs readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("mcp").setLevel(logging.WARNING)

    logger.info("Starting %s (transport=%s)...", settings.app_name, settings.mcp_transport)

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_serve(state, settings.mcp_transport))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)

    logger.info("Bye.")


if __name__ == "__main__":
    main()
