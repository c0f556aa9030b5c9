# src/devtasks/tasks/task_board.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_editor import TaskEditor
from .task_filter import FilterCriteria
from .task_models import Task
from .task_view import BoardView, build_board_view

logger = logging.getLogger(__name__)


class TaskBoard:
    """
    Single owner of the in-memory task collection and the current criteria.

    The collection changes only through reload() (full replace from the store)
    or merge_saved() (after a successful editor save). Each change bumps a
    version counter; the cached projection is keyed on (version, criteria) and
    recomputed only when one of them changes.
    """

    def __init__(self, store: TaskRepo, tasks: list[Task] | None = None) -> None:
        self._store = store
        self._tasks: list[Task] = list(tasks or [])
        self.criteria = FilterCriteria()
        self.loading = False
        self.load_error: str | None = None
        self._version = 0
        self._view_key: tuple[int, FilterCriteria] | None = None
        self._view: BoardView | None = None

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def find(self, task_id_or_prefix: str) -> Task | None:
        """Exact id match first, then a unique id prefix."""
        key = task_id_or_prefix.strip()
        if not key:
            return None
        for t in self._tasks:
            if t.id == key:
                return t
        hits = [t for t in self._tasks if t.id.startswith(key)]
        return hits[0] if len(hits) == 1 else None

    async def reload(self) -> bool:
        """
        Replace the collection with store.list_all().

        On failure the previous collection is kept and load_error is set.
        """
        self.loading = True
        try:
            tasks = await self._store.list_all()
        except Exception as exc:
            logger.exception("Error fetching tasks")
            self.load_error = str(exc) or "Failed to load tasks."
            return False
        finally:
            self.loading = False

        self._tasks = list(tasks)
        self._version += 1
        self.load_error = None
        logger.info("Loaded %d tasks", len(self._tasks))
        return True

    def merge_saved(self, saved: Task) -> None:
        """Replace by id when present, otherwise insert at the top (newest first)."""
        merged: list[Task] = []
        replaced = False
        for t in self._tasks:
            if t.id == saved.id:
                if not replaced:
                    merged.append(saved)
                    replaced = True
                continue
            merged.append(t)

        if not replaced:
            merged.insert(0, saved)

        self._tasks = merged
        self._version += 1
        logger.debug("Merged task id=%s (%s)", saved.id, "replaced" if replaced else "inserted")

    async def submit_editor(self, editor: TaskEditor) -> Task | None:
        saved = await editor.submit()
        if saved is not None:
            self.merge_saved(saved)
        return saved

    def set_criteria(self, criteria: FilterCriteria) -> None:
        self.criteria = criteria

    def view(self) -> BoardView:
        key = (self._version, self.criteria)
        if self._view is None or self._view_key != key:
            self._view = build_board_view(self._tasks, self.criteria)
            self._view_key = key
        return self._view
