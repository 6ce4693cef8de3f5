# src/workast_mcp/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the concrete Workast client into AppState,
- closes it again on shutdown.
"""

from __future__ import annotations

import logging

from ..api.client import WorkastClient
from ..config import get_settings
from ..core.state import AppState

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if not getattr(settings, "api_token", None):
        # Still start: tools are listed, and each call reports the missing token.
        logger.warning("WORKAST_API_TOKEN is not set; every tool call will fail until it is.")

    return AppState(settings=settings, api=WorkastClient(settings))


async def close_state(state: AppState) -> None:
    aclose = getattr(state.api, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("HTTP client close failed.", exc_info=True)
