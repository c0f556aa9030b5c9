# tests/test_task_board.py

from __future__ import annotations

import pytest

from devtasks.tasks.errors import TransportError
from devtasks.tasks.task_board import TaskBoard
from devtasks.tasks.task_editor import EditorMode, TaskEditor
from devtasks.tasks.task_filter import FilterCriteria
from devtasks.tasks.task_models import TaskStatus

from .fakes import FakeTaskRepo, make_task


@pytest.mark.asyncio
async def test_reload_replaces_collection(repo: FakeTaskRepo) -> None:
    board = TaskBoard(repo)
    assert board.tasks == ()

    assert await board.reload() is True

    assert {t.title for t in board.tasks} == {"Fix bug", "Write docs"}
    assert board.loading is False
    assert board.load_error is None


@pytest.mark.asyncio
async def test_failed_reload_keeps_previous_tasks(repo: FakeTaskRepo) -> None:
    board = TaskBoard(repo)
    await board.reload()
    before = board.tasks

    repo.fail_with = TransportError("boom")
    assert await board.reload() is False

    assert board.tasks == before
    assert board.load_error == "boom"
    assert board.loading is False


@pytest.mark.asyncio
async def test_create_merge_inserts_exactly_once(repo: FakeTaskRepo, sample_tasks) -> None:
    board = TaskBoard(repo, sample_tasks)
    editor = TaskEditor(repo)
    editor.open(EditorMode.CREATE)
    editor.set_field("title", "Brand new")

    saved = await board.submit_editor(editor)

    assert saved is not None
    assert [t.id for t in board.tasks].count(saved.id) == 1
    assert board.tasks[0] == saved
    assert len(board.tasks) == len(sample_tasks) + 1


@pytest.mark.asyncio
async def test_edit_merge_replaces_in_place(repo: FakeTaskRepo, sample_tasks) -> None:
    board = TaskBoard(repo, sample_tasks)
    editor = TaskEditor(repo)
    editor.open(EditorMode.EDIT, sample_tasks[1])
    editor.set_field("title", "Write better docs")
    editor.set_field("status", "IN_PROGRESS")
    editor.set_field("tags", "docs")

    saved = await board.submit_editor(editor)

    assert saved is not None
    assert len(board.tasks) == len(sample_tasks)
    assert board.tasks[1].id == sample_tasks[1].id
    merged = board.tasks[1]
    assert (merged.title, merged.status, merged.tags) == ("Write better docs", TaskStatus.IN_PROGRESS, ("docs",))


@pytest.mark.asyncio
async def test_failed_save_leaves_collection_untouched(repo: FakeTaskRepo, sample_tasks) -> None:
    board = TaskBoard(repo, sample_tasks)
    editor = TaskEditor(repo)
    editor.open(EditorMode.CREATE)
    editor.set_field("title", "Nope")
    repo.fail_with = TransportError("Request failed")

    assert await board.submit_editor(editor) is None
    assert board.tasks == tuple(sample_tasks)


def test_merge_saved_is_idempotent_per_id(sample_tasks) -> None:
    board = TaskBoard(FakeTaskRepo(), sample_tasks)
    edited = make_task("Fix bug v2", id=sample_tasks[0].id)

    board.merge_saved(edited)
    board.merge_saved(edited)

    assert [t.id for t in board.tasks] == [t.id for t in sample_tasks]
    assert board.tasks[0].title == "Fix bug v2"


def test_view_is_cached_until_tasks_or_criteria_change(sample_tasks) -> None:
    board = TaskBoard(FakeTaskRepo(), sample_tasks)

    first = board.view()
    assert board.view() is first

    board.set_criteria(FilterCriteria(status=TaskStatus.DONE))
    filtered = board.view()
    assert filtered is not first
    assert filtered.total == 1

    board.set_criteria(FilterCriteria(status=TaskStatus.DONE))
    assert board.view() is filtered

    board.merge_saved(make_task("Also done", status=TaskStatus.DONE))
    refreshed = board.view()
    assert refreshed is not filtered
    assert refreshed.column(TaskStatus.DONE).count == 2


def test_find_by_id_or_unique_prefix() -> None:
    board = TaskBoard(FakeTaskRepo(), [make_task("A", id="abc123"), make_task("B", id="abd456")])

    assert board.find("abc123").title == "A"
    assert board.find("abd").title == "B"
    assert board.find("ab") is None
    assert board.find("") is None
