# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from devtasks.cli.bootstrap import create_initial_state
from devtasks.core.state import AppState
from devtasks.tasks.task_models import TaskPriority, TaskStatus

from .fakes import FakeTaskRepo, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="DevTasks Board",
        log_level="WARNING",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        store_backend="sqlite",
        api_base_url="http://testserver",
        http_timeout_seconds=1.0,
    )


@pytest.fixture()
def sample_tasks():
    return [
        make_task("Fix bug", status=TaskStatus.BACKLOG, priority=TaskPriority.HIGH),
        make_task("Write docs", status=TaskStatus.DONE, priority=TaskPriority.LOW),
    ]


@pytest.fixture()
def repo(sample_tasks) -> FakeTaskRepo:
    return FakeTaskRepo(sample_tasks)


@pytest.fixture()
def state(settings: SimpleNamespace, repo: FakeTaskRepo) -> AppState:
    """AppState wired with the in-memory fake store."""
    return create_initial_state(settings=settings, task_store=repo)
