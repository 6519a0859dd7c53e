# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a
local .env file read by python-dotenv). This file lists every variable the
`todo` command understands.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name used in logs (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level on stderr (default: WARNING).",
    "TODO_LOG_DIR": "If set, full DEBUG logs are also written to <dir>/todo.log.",
    # Storage
    "TODO_TASKS_PATH": "Task list JSON file (default: tasks.json in the working directory).",
    # Validation
    "TODO_MAX_LENGTH": "Max task text length in characters; 0 or less disables (default: 200).",
    "TODO_ENFORCE_UNIQUE": "Reject case-insensitively duplicate task text (default: true).",
}
