# src/devtasks/tasks/task_store.py

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import uuid
from datetime import UTC, datetime
from pathlib import Path

from .errors import DataIntegrityError, NotFoundError, ValidationError
from .task_models import Task, TaskInput, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection, so the async port methods
      can run the blocking calls in a worker thread
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'BACKLOG',
                    priority TEXT NOT NULL DEFAULT 'MEDIUM',
                    tags TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT,
                    updated_at TEXT
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "TEXT NOT NULL DEFAULT 'BACKLOG'")
            add_col("priority", "TEXT NOT NULL DEFAULT 'MEDIUM'")
            add_col("tags", "TEXT NOT NULL DEFAULT '[]'")
            add_col("created_at", "TEXT")
            add_col("updated_at", "TEXT")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _tags_to_str(tags: tuple[str, ...]) -> str:
        return json.dumps(list(tags), ensure_ascii=False)

    @staticmethod
    def _str_to_tags(s: str | None) -> tuple[str, ...]:
        if not s:
            return ()
        try:
            val = json.loads(s)
        except ValueError:
            logger.warning("Malformed tags JSON %r; reading as no tags.", s)
            return ()
        return tuple(str(t) for t in val) if isinstance(val, list) else ()

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        try:
            status = TaskStatus.parse(row["status"])
            priority = TaskPriority.parse(row["priority"])
        except DataIntegrityError:
            logger.error(
                "Task row id=%s has invalid enum values status=%r priority=%r",
                row["id"],
                row["status"],
                row["priority"],
            )
            raise

        return Task(
            id=str(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            status=status,
            priority=priority,
            tags=self._str_to_tags(row["tags"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _validated(payload: TaskInput) -> TaskInput:
        if not payload.title or not payload.title.strip():
            raise ValidationError("Title is required.")
        return payload

    # ---- sync API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def get_task(self, task_id: str) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (str(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(self) -> list[Task]:
        """All tasks, newest first."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY created_at DESC, rowid DESC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def add_task(self, payload: TaskInput) -> Task:
        payload = self._validated(payload)
        task_id = uuid.uuid4().hex
        now = _now_iso()

        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO tasks(
                    id, title, description, status, priority, tags,
                    created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task_id,
                    payload.title,
                    payload.description,
                    payload.status.value,
                    payload.priority.value,
                    self._tags_to_str(payload.tags),
                    now,
                    now,
                ),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug("Task added id=%s status=%s priority=%s", task_id, payload.status, payload.priority)
        return Task(
            id=task_id,
            title=payload.title,
            description=payload.description,
            status=payload.status,
            priority=payload.priority,
            tags=payload.tags,
            created_at=now,
            updated_at=now,
        )

    def update_task(self, task_id: str, payload: TaskInput) -> Task:
        """Replace the mutable fields; id and created_at stay untouched."""
        payload = self._validated(payload)
        now = _now_iso()

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                UPDATE tasks
                SET title = ?,
                    description = ?,
                    status = ?,
                    priority = ?,
                    tags = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    payload.title,
                    payload.description,
                    payload.status.value,
                    payload.priority.value,
                    self._tags_to_str(payload.tags),
                    now,
                    str(task_id),
                ),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise NotFoundError(f"Task {task_id} not found.")
        finally:
            conn.close()

        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found.")
        logger.debug("Task updated id=%s status=%s", task_id, task.status)
        return task

    # ---- TaskRepo port ----

    async def list_all(self) -> list[Task]:
        return await asyncio.to_thread(self.list_tasks)

    async def create(self, payload: TaskInput) -> Task:
        return await asyncio.to_thread(self.add_task, payload)

    async def update_by_id(self, task_id: str, payload: TaskInput) -> Task:
        return await asyncio.to_thread(self.update_task, task_id, payload)
