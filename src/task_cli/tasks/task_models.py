# src/task_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The values are the exact tokens written to the store file and accepted
    by the `list` filter.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Human form used in confirmations ("in-progress" -> "in progress")."""
        return self.value.replace("-", " ")


class ListFilter(StrEnum):
    ALL = "all"
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> ListFilter:
        # Unknown selectors behave like "all".
        if not raw:
            return cls.ALL
        try:
            return cls(raw.lower())
        except ValueError:
            return cls.ALL


def now_ts() -> str:
    """Local ISO date-time with fixed precision, so stamps compare as strings."""
    return datetime.now().isoformat(timespec="microseconds")


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: str
    updated_at: str

    @property
    def updated_date(self) -> str:
        """Date part of updated_at (everything before the first "T")."""
        return self.updated_at.split("T", 1)[0]
