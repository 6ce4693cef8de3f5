# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from workast_mcp.config import DEFAULT_BASE_URL, Settings


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "WORKAST_API_TOKEN",
        "WORKAST_BASE_URL",
        "WORKAST_MAX_CONCURRENCY",
        "WORKAST_DEFAULT_LIMIT",
        "WORKAST_MCP_TRANSPORT",
        "WORKAST_LOG_TO_FILE",
        "WORKAST_DATA_DIR",
        "WORKAST_READ_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_need_no_secrets(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.api_token is None
    assert s.base_url == DEFAULT_BASE_URL
    assert s.max_concurrency == 4
    assert s.default_limit == 25
    assert s.mcp_transport == "stdio"
    assert s.log_to_file is False


def test_env_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("WORKAST_API_TOKEN", "  secret  ")
    clean_env.setenv("WORKAST_BASE_URL", "https://example.test/api/")
    clean_env.setenv("WORKAST_MAX_CONCURRENCY", "0")
    clean_env.setenv("WORKAST_DEFAULT_LIMIT", "not-a-number")
    clean_env.setenv("WORKAST_MCP_TRANSPORT", "SSE")
    clean_env.setenv("WORKAST_LOG_TO_FILE", "yes")
    clean_env.setenv("WORKAST_DATA_DIR", str(tmp_path))
    clean_env.setenv("WORKAST_READ_TIMEOUT_SECONDS", "2.5")

    s = Settings.from_env()
    assert s.api_token == "secret"
    assert s.base_url == "https://example.test/api"
    assert s.max_concurrency == 1
    assert s.default_limit == 25
    assert s.mcp_transport == "sse"
    assert s.log_to_file is True
    assert s.data_dir == tmp_path
    assert s.read_timeout == 2.5


def test_blank_token_is_missing(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("WORKAST_API_TOKEN", "   ")
    assert Settings.from_env().api_token is None


def test_unknown_transport_falls_back_to_stdio(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("WORKAST_MCP_TRANSPORT", "carrier-pigeon")
    assert Settings.from_env().mcp_transport == "stdio"
