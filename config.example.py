# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Everything has a default; nothing is required to start the app.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "POCKET_APP_NAME": "Title shown above the task list (default: pocket-todo).",
    "POCKET_LOG_LEVEL": "Log file level; the console shows WARNING+ only (default: INFO).",
    # Storage
    "POCKET_DATA_DIR": "Local data directory for storage and logs (default: .local/pocket_todo).",
    "POCKET_STORAGE_BACKEND": "Where the task list is kept: json | sqlite (default: json).",
    "POCKET_STORAGE_PATH": (
        "json: directory of <key>.json files (default: <data_dir>/storage); "
        "sqlite: database file (default: <data_dir>/storage.sqlite3)."
    ),
    "POCKET_STORAGE_KEY": "Key the whole task list is stored under (default: tasks).",
    # UI
    "POCKET_THEME": "Initial color theme: light | dark (default: light).",
    "POCKET_CONFIRM_DELETE": "Ask before deleting a task (true/false, default: true).",
}
