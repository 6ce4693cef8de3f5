# src/workast_mcp/tasks/task_search.py

from __future__ import annotations

"""
Task search ("list tasks").

A forward-only pipeline over the Workast API:
- resolve_scope: which spaces to query
- fetch_space_tasks: one listing per space, failing spaces are skipped
- expand_subtasks (opt-in): one detail read per task, subtasks flattened one level deep
- apply_filters: assignee / free-text filters and the result cap

Per-unit fetches return a list or None and are folded in input order, so a
broken space or task only shrinks the result instead of failing the search.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import TypeVar

from ..api.errors import WorkastError
from ..core.ports import WorkastApi
from .task_models import (
    AnnotatedTask,
    Space,
    Task,
    TaskAnnotation,
    TaskQuery,
    TaskStatusFilter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# (space id, space name); name is "" when the space was given explicitly.
ScopeEntry = tuple[str, str]


async def _gather_ordered(
    items: Sequence[T],
    fetch: Callable[[T], Awaitable[R]],
    *,
    max_concurrency: int,
) -> list[R]:
    """Run fetch over items with at most max_concurrency in flight; results keep input order."""
    sem = asyncio.Semaphore(max(1, max_concurrency))

    async def _one(item: T) -> R:
        async with sem:
            return await fetch(item)

    return list(await asyncio.gather(*(_one(i) for i in items)))


def status_query_params(status: TaskStatusFilter | str) -> dict[str, str]:
    """Map a status filter to the `done` query parameter of the space task listing."""
    status = TaskStatusFilter.parse(status)
    if status == TaskStatusFilter.DONE:
        return {"done": "true"}
    if status == TaskStatusFilter.ALL:
        return {"done": "all"}
    return {}


async def resolve_scope(api: WorkastApi, space_id: str | None = None) -> list[ScopeEntry]:
    """
    Spaces to search.

    An explicit space is used as-is (no lookup). Otherwise every space the user
    participates in that is not archived, in upstream order. Upstream errors
    propagate: without a scope there is nothing to search.
    """
    if space_id:
        return [(space_id, "")]

    spaces = [Space.from_api(s) for s in await api.list_spaces()]
    return [(s.id, s.name) for s in spaces if s.is_participant and not s.is_archived]


async def _fetch_one_space(
    api: WorkastApi,
    entry: ScopeEntry,
    params: dict[str, str],
) -> list[AnnotatedTask] | None:
    space_id, space_name = entry
    try:
        raw = await api.list_space_tasks(space_id, dict(params))
    except WorkastError as e:
        logger.warning("Skipping space %s: %s", space_id, e)
        return None

    if raw is None:
        raw = []
    if not isinstance(raw, list):
        logger.warning("Skipping space %s: expected a task list, got %s", space_id, type(raw).__name__)
        return None

    annotation = TaskAnnotation(space_name=space_name) if space_name else TaskAnnotation()
    out: list[AnnotatedTask] = []
    for t in raw:
        if not isinstance(t, Mapping):
            logger.warning("Space %s: ignoring malformed task entry %r", space_id, t)
            continue
        out.append(AnnotatedTask(Task.from_api(t), annotation))
    return out


async def fetch_space_tasks(
    api: WorkastApi,
    scope: Sequence[ScopeEntry],
    status: TaskStatusFilter | str = TaskStatusFilter.ACTIVE,
    *,
    max_concurrency: int = 1,
) -> list[AnnotatedTask]:
    """Tasks of every space in scope, concatenated in scope order."""
    params = status_query_params(status)
    results = await _gather_ordered(
        scope,
        lambda entry: _fetch_one_space(api, entry, params),
        max_concurrency=max_concurrency,
    )

    out: list[AnnotatedTask] = []
    for tasks in results:
        if tasks is not None:
            out.extend(tasks)
    return out


async def _fetch_subtasks(api: WorkastApi, parent: AnnotatedTask) -> list[AnnotatedTask] | None:
    try:
        detail = await api.get_task(parent.id)
    except WorkastError as e:
        logger.warning("Skipping subtasks of task %s: %s", parent.id, e)
        return None

    if not isinstance(detail, Mapping):
        logger.warning(
            "Skipping subtasks of task %s: expected an object, got %s", parent.id, type(detail).__name__
        )
        return None

    full = Task.from_api(detail)

    if not full.sub_tasks:
        return []

    annotation = TaskAnnotation(
        space_name=parent.annotation.space_name or "",
        parent_task_id=parent.id,
        parent_task_name=parent.task.title,
        is_subtask=True,
    )
    return [AnnotatedTask(Task.from_api(st), annotation) for st in full.sub_tasks]


async def expand_subtasks(
    api: WorkastApi,
    tasks: Iterable[AnnotatedTask],
    *,
    max_concurrency: int = 1,
) -> list[AnnotatedTask]:
    """
    The given tasks followed by their subtasks.

    Exactly one level: only the tasks passed in are expanded, never the subtasks
    found here. Costs one upstream call per task, which is why it is opt-in.
    """
    parents = list(tasks)
    results = await _gather_ordered(
        parents,
        lambda parent: _fetch_subtasks(api, parent),
        max_concurrency=max_concurrency,
    )

    out = list(parents)
    for subs in results:
        if subs:
            out.extend(subs)
    return out


def apply_filters(
    tasks: Iterable[AnnotatedTask],
    *,
    assignee: str | None = None,
    query: str | None = None,
    limit: int | None = None,
) -> list[AnnotatedTask]:
    out = list(tasks)

    if assignee:
        out = [t for t in out if assignee in t.task.assignee_ids]

    if query:
        q = query.lower()
        out = [
            t
            for t in out
            if (t.task.title and q in t.task.title.lower())
            or (t.task.description and q in str(t.task.description).lower())
        ]

    if limit and limit > 0 and len(out) > limit:
        out = out[:limit]
    return out


async def search_tasks(
    api: WorkastApi,
    query: TaskQuery,
    *,
    max_concurrency: int = 1,
) -> list[AnnotatedTask]:
    """Run the whole pipeline for one TaskQuery."""
    api.require_credentials()

    scope = await resolve_scope(api, query.space_id)
    logger.info(
        "Task search: spaces=%d status=%s subtasks=%s",
        len(scope),
        query.status,
        query.include_subtasks,
    )

    tasks = await fetch_space_tasks(api, scope, query.status, max_concurrency=max_concurrency)
    if query.include_subtasks:
        tasks = await expand_subtasks(api, tasks, max_concurrency=max_concurrency)

    result = apply_filters(tasks, assignee=query.assignee, query=query.query, limit=query.limit)
    logger.debug("Task search: %d fetched, %d returned", len(tasks), len(result))
    return result
