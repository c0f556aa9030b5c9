# src/devtasks/tasks/http_store.py

"""
HTTP task store.

Talks to the board's JSON API:
- GET   /api/tasks        -> list (newest first)
- POST  /api/tasks        -> create
- PATCH /api/tasks/{id}   -> update

Every failure surfaces as TransportError (NotFoundError for a missing edit
target) carrying the server's message when it sent one.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import DataIntegrityError, NotFoundError, TransportError, ValidationError
from .task_models import Task, TaskInput

logger = logging.getLogger(__name__)

_TASKS_PATH = "/api/tasks"


class HttpTaskStore:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("base_url is required")
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self._base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        try:
            resp = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("Task API %s %s failed: %s", method, path, exc)
            raise TransportError(str(exc) or "Request failed") from exc

        if resp.status_code == 404 and method == "PATCH":
            raise NotFoundError(resp.text or "Task not found.")

        if not resp.is_success:
            logger.warning("Task API %s %s -> %s", method, path, resp.status_code)
            raise TransportError(resp.text or "Request failed")

        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError("Malformed JSON in task API response") from exc

    def _decode(self, data: Any) -> Task:
        if not isinstance(data, dict):
            raise DataIntegrityError(f"expected a task object, got {type(data).__name__}")
        try:
            return Task.from_wire(data)
        except DataIntegrityError:
            logger.error("Task API returned an invalid task: %r", data)
            raise

    async def list_all(self) -> list[Task]:
        data = await self._request("GET", _TASKS_PATH)
        if not isinstance(data, list):
            raise DataIntegrityError(f"expected a task list, got {type(data).__name__}")
        return [self._decode(item) for item in data]

    async def create(self, payload: TaskInput) -> Task:
        if not payload.title.strip():
            raise ValidationError("Title is required.")
        data = await self._request("POST", _TASKS_PATH, json=payload.to_wire())
        return self._decode(data)

    async def update_by_id(self, task_id: str, payload: TaskInput) -> Task:
        data = await self._request("PATCH", f"{_TASKS_PATH}/{task_id}", json=payload.to_wire())
        return self._decode(data)
