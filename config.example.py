# config.example.py

"""
Documentation-only module (safe to commit).

task-cli reads its optional settings from environment variables (optionally via
a local .env file in the working directory). With nothing set it stores tasks
in ./tasks.json and only prints warnings and errors to stderr.
"""

ENV_VARS = {
    # Store
    "TASK_CLI_STORE_PATH": "Path of the tasks file (default: tasks.json in the working directory).",
    # Logging
    "TASK_CLI_LOG_LEVEL": "Console (stderr) log level (default: WARNING).",
    "TASK_CLI_LOG_FILE": "Optional file receiving the full DEBUG log (default: unset).",
}
