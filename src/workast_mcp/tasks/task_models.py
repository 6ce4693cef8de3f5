# src/workast_mcp/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping


class TaskStatusFilter(StrEnum):
    """Which tasks a space listing returns."""

    ACTIVE = "active"
    DONE = "done"
    ALL = "all"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatusFilter:
        if not raw:
            return cls.ACTIVE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown task status filter: {raw!r} (expected active, done or all)") from None


@dataclass(slots=True, frozen=True)
class Space:
    id: str
    name: str
    is_participant: bool
    is_archived: bool

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Space:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            is_participant=bool(data.get("isParticipant")),
            is_archived=bool(data.get("isArchived")),
        )


def _assignee_ids(raw: Any) -> tuple[str, ...]:
    # Workast returns user objects here; bare ids are accepted as well.
    if not isinstance(raw, list):
        return ()
    out: list[str] = []
    for a in raw:
        if isinstance(a, Mapping):
            if a.get("id") is not None:
                out.append(str(a["id"]))
        elif a is not None:
            out.append(str(a))
    return tuple(out)


@dataclass(slots=True, frozen=True)
class Task:
    """
    A Workast task as returned upstream.

    The parsed fields are read-only views used for filtering; `payload` keeps the
    full upstream object (read-only) so nothing the API sent is ever dropped.
    """

    id: str
    title: str | None
    description: str | None
    done: bool
    due_date: str | None
    assignee_ids: tuple[str, ...]
    sub_tasks: tuple[Mapping[str, Any], ...]
    payload: Mapping[str, Any] = field(repr=False)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Task:
        title = data.get("text") or data.get("name")
        subs = data.get("subTasks")
        return cls(
            id=str(data.get("id", "")),
            title=str(title) if title else None,
            description=data.get("description") or None,
            done=bool(data.get("done")),
            due_date=data.get("dueDate"),
            assignee_ids=_assignee_ids(data.get("assignedTo")),
            sub_tasks=tuple(s for s in subs if isinstance(s, Mapping)) if isinstance(subs, list) else (),
            payload=MappingProxyType(dict(data)),
        )


@dataclass(slots=True, frozen=True)
class TaskAnnotation:
    """
    Provenance added during aggregation.

    space_name is None when the task came from an explicitly requested space
    (the name was never looked up). Subtasks always carry a space name, ""
    when the parent had none.
    """

    space_name: str | None = None
    parent_task_id: str | None = None
    parent_task_name: str | None = None
    is_subtask: bool = False


@dataclass(slots=True, frozen=True)
class AnnotatedTask:
    task: Task
    annotation: TaskAnnotation = TaskAnnotation()

    @property
    def id(self) -> str:
        return self.task.id

    def to_dict(self) -> dict[str, Any]:
        """Upstream payload plus the annotation keys that are set."""
        out = dict(self.task.payload)
        ann = self.annotation
        if ann.space_name is not None:
            out["spaceName"] = ann.space_name
        if ann.is_subtask:
            out["parentTaskId"] = ann.parent_task_id
            out["parentTaskName"] = ann.parent_task_name
            out["isSubtask"] = True
        return out


@dataclass(slots=True, frozen=True)
class TaskQuery:
    """Parameters of one task search. limit None/0 means no cap."""

    status: TaskStatusFilter = TaskStatusFilter.ACTIVE
    space_id: str | None = None
    assignee: str | None = None
    query: str | None = None
    limit: int | None = None
    include_subtasks: bool = False
