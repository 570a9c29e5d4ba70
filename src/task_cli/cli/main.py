# src/task_cli/cli/main.py

"""
CLI entrypoint.

One invocation runs one command:
- load the store file,
- dispatch the command against the in-memory repository,
- save the store back (always, even when the command failed).

The exit status is 0 in every case; errors are reported as text only.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.task_store import load_tasks, save_tasks
from .commands import USAGE_BANNER, registry

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        print(USAGE_BANNER)
        return 0

    if settings is None:
        settings = get_settings()

    setup_logging(console_level=settings.console_level, log_file=settings.log_file)
    logger.debug("Invocation argv=%r store=%s", list(argv), settings.store_path)

    repo = load_tasks(settings.store_path)
    try:
        result = registry.handle(repo, argv)
        result.emit()
    finally:
        # Rewriting on every run keeps the file in canonical form.
        save_tasks(repo, settings.store_path)

    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
