# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from workast_mcp.core.state import AppState

from .fakes import FakeWorkastApi, space, task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the client.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment/.env.
    """
    return SimpleNamespace(
        app_name="workast-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        log_to_file=False,
        api_token="test-token",
        base_url="https://api.example.test",
        connect_timeout=1.0,
        read_timeout=1.0,
        max_concurrency=4,
        default_limit=25,
        mcp_transport="stdio",
    )


@pytest.fixture()
def api() -> FakeWorkastApi:
    """
    Two participating spaces, one archived and one foreign space.

    t1 has two subtasks, t3 has one; t2 has none.
    """
    return FakeWorkastApi(
        spaces=[
            space("s1", "Backlog"),
            space("s-arch", "Old", archived=True),
            space("s2", "Ops"),
            space("s-other", "Not mine", participant=False),
        ],
        space_tasks={
            "s1": [
                task("t1", "Write release notes", assignees=("u1",), description="For v2"),
                task("t2", "Fix login bug", assignees=("u2",)),
            ],
            "s2": [task("t3", "Rotate keys", assignees=("u1", "u2"))],
            "s-arch": [task("t-arch", "Archived work")],
            "s-other": [task("t-other", "Foreign work")],
        },
        task_details={
            "t1": task(
                "t1",
                "Write release notes",
                subTasks=[task("st1", "Draft notes", assignees=("u2",)), task("st2", "Review notes")],
            ),
            "t2": task("t2", "Fix login bug"),
            "t3": task(
                "t3",
                "Rotate keys",
                subTasks=[task("st3", "Rotate DB key", subTasks=[task("gst1", "Grandchild")])],
            ),
            "st1": task("st1", "Draft notes", subTasks=[task("gst2", "Should never appear")]),
        },
    )


@pytest.fixture()
def state(settings: SimpleNamespace, api: FakeWorkastApi) -> AppState:
    return AppState(settings=settings, api=api)
