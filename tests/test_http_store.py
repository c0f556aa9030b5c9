# tests/test_http_store.py

from __future__ import annotations

import json

import httpx
import pytest

from devtasks.tasks.errors import DataIntegrityError, NotFoundError, TransportError, ValidationError
from devtasks.tasks.http_store import HttpTaskStore
from devtasks.tasks.task_models import TaskInput, TaskPriority, TaskStatus

BASE = "http://testserver"

DOC = {
    "_id": "65f0",
    "title": "Fix bug",
    "description": "NPE",
    "status": "IN_PROGRESS",
    "priority": "HIGH",
    "tags": ["api"],
    "createdAt": "2024-01-01T10:00:00.000Z",
    "updatedAt": "2024-01-02T10:00:00.000Z",
}


def _store(handler) -> HttpTaskStore:
    client = httpx.AsyncClient(base_url=BASE, transport=httpx.MockTransport(handler))
    return HttpTaskStore(BASE, client=client)


@pytest.mark.asyncio
async def test_list_all_decodes_tasks() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json=[DOC])

    tasks = await _store(handler).list_all()

    assert seen == [("GET", "/api/tasks")]
    assert len(tasks) == 1
    assert tasks[0].id == "65f0"
    assert tasks[0].status is TaskStatus.IN_PROGRESS
    assert tasks[0].tags == ("api",)


@pytest.mark.asyncio
async def test_create_posts_json_payload() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/tasks"
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={**DOC, "_id": "new", "title": "Fix bug"})

    saved = await _store(handler).create(
        TaskInput(title="Fix bug", priority=TaskPriority.HIGH, tags=("api",))
    )

    assert bodies == [
        {"title": "Fix bug", "description": "", "status": "BACKLOG", "priority": "HIGH", "tags": ["api"]}
    ]
    assert saved.id == "new"


@pytest.mark.asyncio
async def test_create_with_blank_title_makes_no_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(ValidationError):
        await _store(handler).create(TaskInput(title=" "))


@pytest.mark.asyncio
async def test_update_patches_by_id() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert (request.method, request.url.path) == ("PATCH", "/api/tasks/65f0")
        return httpx.Response(200, json=DOC)

    saved = await _store(handler).update_by_id("65f0", TaskInput(title="Fix bug"))
    assert saved.description == "NPE"


@pytest.mark.asyncio
async def test_update_missing_task_raises_not_found() -> None:
    store = _store(lambda request: httpx.Response(404, text="Task not found"))

    with pytest.raises(NotFoundError, match="Task not found"):
        await store.update_by_id("gone", TaskInput(title="x"))


@pytest.mark.asyncio
async def test_error_status_uses_body_text_or_default() -> None:
    with pytest.raises(TransportError, match="Title is required"):
        await _store(lambda r: httpx.Response(400, text="Title is required")).create(TaskInput(title="x"))

    with pytest.raises(TransportError, match="Request failed"):
        await _store(lambda r: httpx.Response(500)).list_all()


@pytest.mark.asyncio
async def test_network_error_becomes_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="connection refused"):
        await _store(handler).list_all()


@pytest.mark.asyncio
async def test_invalid_payloads_fail_fast() -> None:
    with pytest.raises(DataIntegrityError):
        await _store(lambda r: httpx.Response(200, json={"not": "a list"})).list_all()

    with pytest.raises(DataIntegrityError):
        await _store(lambda r: httpx.Response(200, json=[{**DOC, "status": "ARCHIVED"}])).list_all()


def test_base_url_required() -> None:
    with pytest.raises(ValueError):
        HttpTaskStore(" ")
