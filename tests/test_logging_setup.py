# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from workast_mcp.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_app_logs_and_mutes_libraries() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("workast_mcp.tasks.task_search", logging.DEBUG))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("httpx", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))


def test_file_handler_only_when_log_dir_given(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        setup_logging(log_dir=None)
        assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)

        setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("workast_mcp.test").info("hello")
        assert (tmp_path / "logs" / "workast-mcp.log").exists()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)
