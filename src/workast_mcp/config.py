# src/workast_mcp/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the API token is checked on first use).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "WORKAST"

DEFAULT_BASE_URL = "https://api.todobot.io"
MCP_TRANSPORTS = ("stdio", "sse", "streamable-http")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path
    log_to_file: bool

    # ---- Workast API ----
    api_token: Optional[str]
    base_url: str
    connect_timeout: float
    read_timeout: float

    # ---- Task search ----
    max_concurrency: int
    default_limit: int

    # ---- Tool server ----
    mcp_transport: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "workast")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/workast"))
        log_to_file = _env_bool(_k("LOG_TO_FILE"), False)

        # Blank token counts as missing.
        api_token = (_env(_k("API_TOKEN")) or "").strip() or None
        base_url = _env(_k("BASE_URL"), DEFAULT_BASE_URL).strip().rstrip("/")

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 30.0)

        # 1 => strictly sequential upstream calls.
        max_concurrency = max(1, _env_int(_k("MAX_CONCURRENCY"), 4))
        default_limit = max(0, _env_int(_k("DEFAULT_LIMIT"), 25))

        mcp_transport = _env(_k("MCP_TRANSPORT"), "stdio").strip().lower()
        if mcp_transport not in MCP_TRANSPORTS:
            mcp_transport = "stdio"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            log_to_file=log_to_file,
            api_token=api_token,
            base_url=base_url,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            max_concurrency=max_concurrency,
            default_limit=default_limit,
            mcp_transport=mcp_transport,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
