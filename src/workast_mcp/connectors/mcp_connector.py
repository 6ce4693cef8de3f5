# src/workast_mcp/connectors/mcp_connector.py

"""
MCP connector: exposes the Workast API as tools on a FastMCP server.

Every tool returns pretty-printed JSON text; its input schema comes from the
parameter annotations. Upstream errors are not caught here; FastMCP reports
them to the agent as tool errors with the message
(for API errors that includes the HTTP status and the response body).
"""

import json
import logging
from typing import Annotated, Any, Literal

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..core.state import AppState
from ..tasks.task_models import TaskQuery, TaskStatusFilter
from ..tasks.task_search import search_tasks

logger = logging.getLogger(__name__)

SERVER_NAME = "workast"

_READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)
_WRITE = ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True)
_DESTRUCTIVE = ToolAnnotations(readOnlyHint=False, destructiveHint=True, openWorldHint=True)

SpaceId = Annotated[str, Field(description="The space/list ID")]
TaskId = Annotated[str, Field(description="The task ID")]
UserId = Annotated[str, Field(description="The user ID")]


def _ok(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


class WorkastTools:
    """Tool implementations bound to one AppState. register() publishes them on a server."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    @property
    def _api(self):
        return self.state.api

    # ---- Spaces ----

    async def list_spaces(self) -> str:
        return _ok(await self._api.list_spaces())

    async def get_space(self, space_id: SpaceId) -> str:
        return _ok(await self._api.get_space(space_id))

    async def create_space(
        self,
        name: Annotated[str, Field(description="Name of the space")],
        description: Annotated[str | None, Field(description="Optional description")] = None,
    ) -> str:
        return _ok(await self._api.create_space(name, description))

    # ---- Tasks ----

    async def list_tasks(
        self,
        space_id: Annotated[str | None, Field(description="Filter by space/list ID")] = None,
        query: Annotated[str | None, Field(description="Text search query")] = None,
        status: Annotated[
            Literal["active", "done", "all"], Field(description="Task status filter")
        ] = "active",
        assignee: Annotated[str | None, Field(description="Filter by assignee user ID")] = None,
        limit: Annotated[
            int | None, Field(ge=0, description="Max results (default 25, 0 = no cap)")
        ] = None,
        include_subtasks: Annotated[
            bool,
            Field(description="Include subtasks in results (slower, fetches each task's details)"),
        ] = False,
    ) -> str:
        settings = self.state.settings
        if limit is None:
            limit = int(getattr(settings, "default_limit", 25))

        task_query = TaskQuery(
            status=TaskStatusFilter.parse(status),
            space_id=space_id,
            assignee=assignee,
            query=query,
            limit=limit,
            include_subtasks=include_subtasks,
        )
        tasks = await search_tasks(
            self._api,
            task_query,
            max_concurrency=int(getattr(settings, "max_concurrency", 1)),
        )
        return _ok([t.to_dict() for t in tasks])

    async def get_task(self, task_id: TaskId) -> str:
        return _ok(await self._api.get_task(task_id))

    async def create_task(
        self,
        space_id: Annotated[str, Field(description="The space/list ID to create the task in")],
        name: Annotated[str, Field(description="Task name/title")],
        description: Annotated[str | None, Field(description="Task description")] = None,
        due_date: Annotated[str | None, Field(description="Due date in ISO 8601, e.g. 2025-03-01")] = None,
        assignee: Annotated[str | None, Field(description="User ID to assign")] = None,
    ) -> str:
        return _ok(
            await self._api.create_task(
                space_id,
                name,
                description=description,
                due_date=due_date,
                assignee=assignee,
            )
        )

    async def update_task(
        self,
        task_id: TaskId,
        name: Annotated[str | None, Field(description="New task name")] = None,
        description: Annotated[str | None, Field(description="New description")] = None,
        due_date: Annotated[str | None, Field(description="New due date in ISO 8601")] = None,
    ) -> str:
        return _ok(
            await self._api.update_task(task_id, name=name, description=description, due_date=due_date)
        )

    async def complete_task(self, task_id: TaskId) -> str:
        return _ok(await self._api.complete_task(task_id))

    async def reopen_task(self, task_id: TaskId) -> str:
        return _ok(await self._api.reopen_task(task_id))

    async def delete_task(self, task_id: TaskId) -> str:
        await self._api.delete_task(task_id)
        return "Task deleted successfully."

    async def assign_task(self, task_id: TaskId, user_id: UserId) -> str:
        return _ok(await self._api.assign_task(task_id, user_id))

    async def unassign_task(self, task_id: TaskId, user_id: UserId) -> str:
        return _ok(await self._api.unassign_task(task_id, user_id))

    async def add_comment(
        self,
        task_id: TaskId,
        text: Annotated[str, Field(description="Comment text")],
    ) -> str:
        return _ok(await self._api.add_comment(task_id, text))

    async def create_subtask(
        self,
        task_id: Annotated[str, Field(description="The parent task ID")],
        name: Annotated[str, Field(description="Subtask name")],
    ) -> str:
        return _ok(await self._api.create_subtask(task_id, name))

    # ---- Users / tags ----

    async def list_users(self) -> str:
        return _ok(await self._api.list_users())

    async def get_me(self) -> str:
        return _ok(await self._api.get_me())

    async def list_tags(self) -> str:
        return _ok(await self._api.list_tags())

    async def add_tags_to_task(
        self,
        task_id: TaskId,
        tag_ids: Annotated[str, Field(description="Comma-separated tag IDs to add")],
    ) -> str:
        ids = [s.strip() for s in tag_ids.split(",")]
        return _ok(await self._api.add_tags_to_task(task_id, ids))

    def register(self, mcp: FastMCP) -> None:
        tools = [
            ("list_spaces", self.list_spaces, _READ_ONLY,
             "List all Workast spaces (lists/projects). Returns names, IDs, metadata."),
            ("get_space", self.get_space, _READ_ONLY,
             "Get details of a specific Workast space by ID."),
            ("create_space", self.create_space, _WRITE,
             "Create a new Workast space/list."),
            ("list_tasks", self.list_tasks, _READ_ONLY,
             "Search/list tasks. Filter by space, status, assignee, or text query. "
             "Set include_subtasks=true to also search within subtasks "
             "(fetches full task details, slower)."),
            ("get_task", self.get_task, _READ_ONLY,
             "Get full details of a specific task by ID."),
            ("create_task", self.create_task, _WRITE,
             "Create a new task in a Workast space."),
            ("update_task", self.update_task, _WRITE,
             "Update an existing task (name, description, due date)."),
            ("complete_task", self.complete_task, _WRITE,
             "Mark a task as complete/done."),
            ("reopen_task", self.reopen_task, _WRITE,
             "Reopen a completed task (mark as not done)."),
            ("delete_task", self.delete_task, _DESTRUCTIVE,
             "Delete a task."),
            ("assign_task", self.assign_task, _WRITE,
             "Assign a user to a task."),
            ("unassign_task", self.unassign_task, _DESTRUCTIVE,
             "Remove a user assignment from a task."),
            ("add_comment", self.add_comment, _WRITE,
             "Add a comment to a task."),
            ("create_subtask", self.create_subtask, _WRITE,
             "Create a subtask under an existing task."),
            ("list_users", self.list_users, _READ_ONLY,
             "List all users in the Workast workspace."),
            ("get_me", self.get_me, _READ_ONLY,
             "Get the current authenticated user profile."),
            ("list_tags", self.list_tags, _READ_ONLY,
             "List all tags in the workspace."),
            ("add_tags_to_task", self.add_tags_to_task, _WRITE,
             "Add tags to a task."),
        ]
        for name, fn, annotations, description in tools:
            mcp.tool(name=name, description=description, annotations=annotations)(fn)
        logger.debug("Registered %d Workast tools.", len(tools))


def build_server(state: AppState) -> FastMCP:
    mcp = FastMCP(SERVER_NAME)
    WorkastTools(state).register(mcp)
    return mcp
