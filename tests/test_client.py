# tests/test_client.py

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest

from workast_mcp.api.client import WorkastClient
from workast_mcp.api.errors import WorkastAPIError, WorkastConfigError, WorkastTransportError


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, responses: dict[tuple[str, str], httpx.Response] | None = None) -> None:
        self.responses = responses or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.get((request.method, request.url.path), httpx.Response(200, json={}))


def _client(settings: SimpleNamespace, recorder: Recorder) -> WorkastClient:
    return WorkastClient(settings, transport=httpx.MockTransport(recorder))


@pytest.mark.asyncio
async def test_requests_carry_bearer_token_and_json_content_type(settings: SimpleNamespace) -> None:
    rec = Recorder({("GET", "/list"): httpx.Response(200, json=[{"id": "s1"}])})
    client = _client(settings, rec)

    assert await client.list_spaces() == [{"id": "s1"}]

    req = rec.requests[0]
    assert str(req.url) == "https://api.example.test/list"
    assert req.headers["Authorization"] == "Bearer test-token"
    assert req.headers["Content-Type"] == "application/json"
    await client.aclose()


@pytest.mark.asyncio
async def test_status_query_is_sent_and_empty_values_dropped(settings: SimpleNamespace) -> None:
    rec = Recorder({("GET", "/list/s1/task"): httpx.Response(200, json=[])})
    client = _client(settings, rec)

    await client.list_space_tasks("s1", {"done": "all"})
    await client.list_space_tasks("s1", {})
    await client.request("GET", "/list/s1/task", query={"done": "", "x": None, "y": 1})

    assert rec.requests[0].url.params["done"] == "all"
    assert "done" not in rec.requests[1].url.params
    assert dict(rec.requests[2].url.params) == {"y": "1"}
    await client.aclose()


@pytest.mark.asyncio
async def test_error_status_carries_status_and_body(settings: SimpleNamespace) -> None:
    rec = Recorder({("GET", "/task/nope"): httpx.Response(404, text='{"message":"Task not found"}')})
    client = _client(settings, rec)

    with pytest.raises(WorkastAPIError) as exc:
        await client.get_task("nope")

    assert exc.value.status_code == 404
    assert exc.value.body == '{"message":"Task not found"}'
    assert str(exc.value) == 'Workast API GET /task/nope returned 404: {"message":"Task not found"}'
    await client.aclose()


@pytest.mark.asyncio
async def test_empty_body_decodes_to_empty_dict(settings: SimpleNamespace) -> None:
    rec = Recorder({("POST", "/task/t1/done"): httpx.Response(204)})
    client = _client(settings, rec)
    assert await client.complete_task("t1") == {}
    await client.aclose()


@pytest.mark.asyncio
async def test_invalid_json_is_a_transport_error(settings: SimpleNamespace) -> None:
    rec = Recorder({("GET", "/user/me"): httpx.Response(200, text="<html>oops</html>")})
    client = _client(settings, rec)
    with pytest.raises(WorkastTransportError):
        await client.get_me()
    await client.aclose()


@pytest.mark.asyncio
async def test_network_failure_is_a_transport_error(settings: SimpleNamespace) -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = WorkastClient(settings, transport=httpx.MockTransport(boom))
    with pytest.raises(WorkastTransportError) as exc:
        await client.list_tags()
    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    await client.aclose()


@pytest.mark.asyncio
async def test_missing_token_fails_without_request(settings: SimpleNamespace) -> None:
    settings.api_token = None
    rec = Recorder()
    client = _client(settings, rec)

    with pytest.raises(WorkastConfigError, match="WORKAST_API_TOKEN"):
        await client.list_spaces()
    assert rec.requests == []


@pytest.mark.asyncio
async def test_write_endpoints_send_expected_bodies(settings: SimpleNamespace) -> None:
    rec = Recorder()
    client = _client(settings, rec)

    await client.create_task("s1", "New", due_date="2025-03-01", assignee="u1")
    await client.update_task("t1", description="More detail")
    await client.assign_task("t1", "u2")
    await client.unassign_task("t1", "u2")
    await client.add_comment("t1", "hello")
    await client.create_subtask("t1", "child")
    await client.add_tags_to_task("t1", ["a", "b"])
    await client.create_space("Space")

    sent = [(r.method, r.url.path, json.loads(r.content)) for r in rec.requests]
    assert sent == [
        ("POST", "/list/s1/task", {"name": "New", "dueDate": "2025-03-01", "assignedTo": ["u1"]}),
        ("PATCH", "/task/t1", {"description": "More detail"}),
        ("POST", "/task/t1/assigned", {"userId": "u2"}),
        ("DELETE", "/task/t1/assigned", {"userId": "u2"}),
        ("POST", "/task/t1/activity", {"text": "hello"}),
        ("POST", "/task/t1/subtask", {"name": "child"}),
        ("POST", "/task/t1/tag", {"tagIds": ["a", "b"]}),
        ("POST", "/list", {"name": "Space"}),
    ]
    await client.aclose()


@pytest.mark.asyncio
async def test_bodyless_calls_send_no_content(settings: SimpleNamespace) -> None:
    rec = Recorder()
    client = _client(settings, rec)

    await client.reopen_task("t1")
    await client.delete_task("t1")

    assert [(r.method, r.url.path, r.content) for r in rec.requests] == [
        ("POST", "/task/t1/undone", b""),
        ("DELETE", "/task/t1", b""),
    ]
    await client.aclose()
