# src/workast_mcp/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import WorkastApi


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any
    api: WorkastApi
