# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_cli.cli import main as cli_main
from task_cli.tasks.task_store import TaskRepository


@pytest.fixture(autouse=True)
def _keep_pytest_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    main() reconfigures the root logger, which would drop pytest's capture
    handler. Tests that exercise setup_logging() call it directly.
    """
    monkeypatch.setattr(cli_main, "setup_logging", lambda **_: None)


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def settings(store_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with cli.main.

    A SimpleNamespace keeps tests independent of the process environment.
    """
    return SimpleNamespace(
        store_path=store_path,
        log_level="WARNING",
        console_level=logging.WARNING,
        log_file=None,
    )


@pytest.fixture()
def repo() -> TaskRepository:
    return TaskRepository()
