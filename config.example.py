# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "DEVTASKS_APP_NAME": "App display name (default: DevTasks Board).",
    "DEVTASKS_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "DEVTASKS_DATA_DIR": "Local data directory (default: .local/devtasks).",
    "DEVTASKS_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # Task store
    "DEVTASKS_STORE_BACKEND": "Task store backend: sqlite (default) or http.",
    "DEVTASKS_API_BASE_URL": "Board API base URL for the http backend (default: http://localhost:3000).",
    "DEVTASKS_HTTP_TIMEOUT_SECONDS": "HTTP request timeout in seconds (default: 10).",
}
