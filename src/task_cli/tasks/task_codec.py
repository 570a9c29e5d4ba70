# src/task_cli/tasks/task_codec.py

"""
Store codec for the tasks file.

The file is a JSON-looking array of flat objects, one per task:

    [
    {"id":1,"description":"Write report","status":"todo","createdAt":"...","updatedAt":"..."},
    {"id":2,...}
    ]

It is written and read only by this tool, so decoding is a pattern match over
the canonical object shape rather than a JSON parse. Only the double quote is
escaped inside descriptions; everything else is written verbatim.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

TASK_PATTERN = re.compile(
    r'\{"id":([^,{}]*?)'
    r',"description":"(.*?)"'
    r',"status":"(.*?)"'
    r',"createdAt":"(.*?)"'
    r',"updatedAt":"(.*?)"\}',
    re.DOTALL,
)

_INT_RE = re.compile(r"^[0-9]+$")

EMPTY_STORE = "[]"


def escape_description(text: str) -> str:
    return text.replace('"', '\\"')


def unescape_description(text: str) -> str:
    return text.replace('\\"', '"')


def encode_task(task: Task) -> str:
    return (
        f'{{"id":{task.id}'
        f',"description":"{escape_description(task.description)}"'
        f',"status":"{task.status.value}"'
        f',"createdAt":"{task.created_at}"'
        f',"updatedAt":"{task.updated_at}"}}'
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    return "[\n" + ",\n".join(encode_task(t) for t in tasks) + "\n]"


def _parse_id(raw: str) -> int | None:
    raw = raw.strip()
    if not _INT_RE.match(raw):
        return None
    task_id = int(raw)
    return task_id if task_id > 0 else None


def decode_tasks(text: str) -> list[Task]:
    """
    Rebuild the task list from file content.

    Empty content and "[]" decode to an empty list. Status tokens are matched
    case-insensitively. Objects with a corrupt or non-positive id, an unknown
    status or an id seen earlier in the file are skipped with a warning; the
    rest of the file is still decoded.
    """
    body = text.strip()
    if not body or body == EMPTY_STORE:
        return []

    if body.startswith("["):
        body = body[1:]
    if body.endswith("]"):
        body = body[:-1]

    tasks: list[Task] = []
    seen: set[int] = set()

    for m in TASK_PATTERN.finditer(body):
        raw_id, raw_desc, raw_status, created_at, updated_at = m.groups()

        task_id = _parse_id(raw_id)
        if task_id is None:
            logger.warning("Corrupt task id %r found in store; skipping task.", raw_id)
            continue

        status = TaskStatus.parse(raw_status.strip().lower())
        if status is None:
            logger.warning(
                "Unknown status %r for task id=%s found in store; skipping task.",
                raw_status,
                task_id,
            )
            continue

        if task_id in seen:
            logger.warning("Duplicate task id=%s found in store; skipping task.", task_id)
            continue
        seen.add(task_id)

        tasks.append(
            Task(
                id=task_id,
                description=unescape_description(raw_desc),
                status=status,
                created_at=created_at,
                updated_at=updated_at,
            )
        )

    logger.debug("Decoded %d task(s) from store content (%d chars).", len(tasks), len(text))
    return tasks
