# src/workast_mcp/api/client.py

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from ..config import get_settings
from ..core.ports import JsonDict
from .errors import WorkastAPIError, WorkastConfigError, WorkastTransportError

logger = logging.getLogger(__name__)


def _clean_query(query: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop None/empty values; Workast treats an empty param differently from a missing one."""
    if not query:
        return {}
    return {k: str(v) for k, v in query.items() if v is not None and v != ""}


def _make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


class WorkastClient:
    """
    Async client for the Workast REST API.

    IMPORTANT:
    - No secrets required at construction time; the token is checked before
      every request so a misconfigured server still starts and lists its tools.
    - No retries and no caching: every call is exactly one HTTP request.
    """

    def __init__(self, settings=None, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        if settings is None:
            settings = get_settings()
        self._token: str | None = getattr(settings, "api_token", None)
        self._base_url: str = str(getattr(settings, "base_url", "") or "")
        self._timeout = _make_timeout(
            float(getattr(settings, "connect_timeout", 5.0)),
            float(getattr(settings, "read_timeout", 30.0)),
        )
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    def require_credentials(self) -> None:
        if not self._token or not str(self._token).strip():
            raise WorkastConfigError("WORKAST_API_TOKEN env variable is not set")
        if not self._base_url.strip():
            raise WorkastConfigError("Workast base URL is not set. Set WORKAST_BASE_URL in your .env.")

    def _get_http(self) -> httpx.AsyncClient:
        """Lazily create and cache the pooled httpx client."""
        if self._http is not None:
            return self._http

        self.require_credentials()
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: JsonDict | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Perform one API call and decode the JSON reply.

        Empty reply bodies decode to {}. Non-2xx replies raise WorkastAPIError
        carrying the status and the body text verbatim.
        """
        self.require_credentials()
        http = self._get_http()
        params = _clean_query(query)

        logger.debug("Workast %s %s params=%s", method, path, params)
        try:
            resp = await http.request(
                method,
                path,
                params=params or None,
                json=body if body is not None else None,
            )
        except httpx.HTTPError as e:
            raise WorkastTransportError(f"Workast API {method} {path} failed: {e}") from e

        text = resp.text
        if not resp.is_success:
            raise WorkastAPIError(method, path, resp.status_code, text)
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError as e:
            raise WorkastTransportError(f"Workast API {method} {path} returned invalid JSON") from e

    # ---- Spaces ----

    async def list_spaces(self) -> list[JsonDict]:
        return await self.request("GET", "/list")

    async def get_space(self, space_id: str) -> JsonDict:
        return await self.request("GET", f"/list/{space_id}")

    async def create_space(self, name: str, description: str | None = None) -> JsonDict:
        body: JsonDict = {"name": name}
        if description:
            body["description"] = description
        return await self.request("POST", "/list", body=body)

    # ---- Tasks ----

    async def list_space_tasks(
        self,
        space_id: str,
        query: Mapping[str, str] | None = None,
    ) -> list[JsonDict]:
        return await self.request("GET", f"/list/{space_id}/task", query=query)

    async def get_task(self, task_id: str) -> JsonDict:
        return await self.request("GET", f"/task/{task_id}")

    async def create_task(
        self,
        space_id: str,
        name: str,
        *,
        description: str | None = None,
        due_date: str | None = None,
        assignee: str | None = None,
    ) -> JsonDict:
        body: JsonDict = {"name": name}
        if description:
            body["description"] = description
        if due_date:
            body["dueDate"] = due_date
        if assignee:
            body["assignedTo"] = [assignee]
        return await self.request("POST", f"/list/{space_id}/task", body=body)

    async def update_task(
        self,
        task_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        due_date: str | None = None,
    ) -> JsonDict:
        body: JsonDict = {}
        if name:
            body["name"] = name
        if description:
            body["description"] = description
        if due_date:
            body["dueDate"] = due_date
        return await self.request("PATCH", f"/task/{task_id}", body=body)

    async def complete_task(self, task_id: str) -> JsonDict:
        return await self.request("POST", f"/task/{task_id}/done")

    async def reopen_task(self, task_id: str) -> JsonDict:
        return await self.request("POST", f"/task/{task_id}/undone")

    async def delete_task(self, task_id: str) -> None:
        await self.request("DELETE", f"/task/{task_id}")

    async def assign_task(self, task_id: str, user_id: str) -> JsonDict:
        return await self.request("POST", f"/task/{task_id}/assigned", body={"userId": user_id})

    async def unassign_task(self, task_id: str, user_id: str) -> JsonDict:
        return await self.request("DELETE", f"/task/{task_id}/assigned", body={"userId": user_id})

    async def add_comment(self, task_id: str, text: str) -> JsonDict:
        return await self.request("POST", f"/task/{task_id}/activity", body={"text": text})

    async def create_subtask(self, task_id: str, name: str) -> JsonDict:
        return await self.request("POST", f"/task/{task_id}/subtask", body={"name": name})

    # ---- Users / tags ----

    async def list_users(self) -> list[JsonDict]:
        return await self.request("GET", "/user")

    async def get_me(self) -> JsonDict:
        return await self.request("GET", "/user/me")

    async def list_tags(self) -> list[JsonDict]:
        return await self.request("GET", "/tag")

    async def add_tags_to_task(self, task_id: str, tag_ids: list[str]) -> JsonDict:
        return await self.request("POST", f"/task/{task_id}/tag", body={"tagIds": list(tag_ids)})
