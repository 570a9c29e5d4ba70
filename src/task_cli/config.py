# src/task_cli/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per invocation.
- Every variable is optional; with none set the tool uses ./tasks.json.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_CLI"

DEFAULT_STORE_FILE = "tasks.json"
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_log_level(name: str, default: str) -> str:
    raw = _env(name, default).strip().upper()
    if isinstance(logging.getLevelName(raw), int):
        return raw
    return default


@dataclass(frozen=True, slots=True)
class Settings:
    store_path: Path
    log_level: str
    log_file: Path | None

    @property
    def console_level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    @staticmethod
    def from_env(*, use_dotenv: bool = True) -> "Settings":
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        store_path = _env_path(_k("STORE_PATH"), None) or Path(DEFAULT_STORE_FILE)

        return Settings(
            store_path=store_path,
            log_level=_env_log_level(_k("LOG_LEVEL"), DEFAULT_LOG_LEVEL),
            log_file=_env_path(_k("LOG_FILE"), None),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
