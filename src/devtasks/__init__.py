"""DevTasks Board: a three-column task board (Backlog, In Progress, Done)."""

__version__ = "0.1.0"
