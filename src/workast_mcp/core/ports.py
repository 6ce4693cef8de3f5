# src/workast_mcp/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Task search and the tool layer depend on this Protocol instead of the concrete
HTTP client, so the upstream can be replaced by an in-memory fake in tests.
Payloads are plain JSON values exactly as Workast returns them.
"""

from typing import Any, Mapping, Protocol

JsonDict = dict[str, Any]


class WorkastApi(Protocol):
    def require_credentials(self) -> None:
        """Raise WorkastConfigError if no upstream call can be authenticated."""
        ...

    # Spaces
    async def list_spaces(self) -> list[JsonDict]: ...
    async def get_space(self, space_id: str) -> JsonDict: ...
    async def create_space(self, name: str, description: str | None = None) -> JsonDict: ...

    # Tasks (read side used by task search)
    async def list_space_tasks(
            self,
            space_id: str,
            query: Mapping[str, str] | None = None,
    ) -> list[JsonDict]: ...
    async def get_task(self, task_id: str) -> JsonDict: ...

    # Tasks (write side)
    async def create_task(
            self,
            space_id: str,
            name: str,
            *,
            description: str | None = None,
            due_date: str | None = None,
            assignee: str | None = None,
    ) -> JsonDict: ...
    async def update_task(
            self,
            task_id: str,
            *,
            name: str | None = None,
            description: str | None = None,
            due_date: str | None = None,
    ) -> JsonDict: ...
    async def complete_task(self, task_id: str) -> JsonDict: ...
    async def reopen_task(self, task_id: str) -> JsonDict: ...
    async def delete_task(self, task_id: str) -> None: ...
    async def assign_task(self, task_id: str, user_id: str) -> JsonDict: ...
    async def unassign_task(self, task_id: str, user_id: str) -> JsonDict: ...
    async def add_comment(self, task_id: str, text: str) -> JsonDict: ...
    async def create_subtask(self, task_id: str, name: str) -> JsonDict: ...

    # Users / tags
    async def list_users(self) -> list[JsonDict]: ...
    async def get_me(self) -> JsonDict: ...
    async def list_tags(self) -> list[JsonDict]: ...
    async def add_tags_to_task(self, task_id: str, tag_ids: list[str]) -> JsonDict: ...
