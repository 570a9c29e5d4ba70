# src/task_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .task_codec import decode_tasks, encode_tasks
from .task_models import ListFilter, Task, TaskStatus, now_ts

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("tasks.json")


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found.")
        self.task_id = task_id


class TaskRepository:
    """
    In-memory task collection for one invocation.

    Built by load_tasks(), mutated by exactly one command, then handed to
    save_tasks(). Insertion order is the file order.

    Id policy: next id is max(existing ids) + 1, so deleting the highest task
    frees its id for the next add.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    # ---- helpers ----

    def _require(self, task_id: int) -> Task:
        task = self.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    @staticmethod
    def _touch(task: Task) -> None:
        # Never move updated_at backwards, even if the wall clock did.
        task.updated_at = max(now_ts(), task.updated_at, task.created_at)

    # ---- public API ----

    def next_id(self) -> int:
        return max((t.id for t in self._tasks), default=0) + 1

    def add(self, description: str) -> Task:
        ts = now_ts()
        task = Task(
            id=self.next_id(),
            description=description,
            status=TaskStatus.TODO,
            created_at=ts,
            updated_at=ts,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        return task

    def find_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def update_description(self, task_id: int, description: str) -> Task:
        task = self._require(task_id)
        task.description = description
        self._touch(task)
        logger.debug("Task updated id=%s", task_id)
        return task

    def set_status(self, task_id: int, status: TaskStatus | str) -> Task:
        new_status = TaskStatus.parse(str(status))
        if new_status is None:
            raise ValueError(f"invalid task status: {status!r}")

        task = self._require(task_id)
        task.status = new_status
        self._touch(task)
        logger.debug("Task status id=%s status=%s", task_id, new_status.value)
        return task

    def delete(self, task_id: int) -> Task:
        task = self._require(task_id)
        self._tasks.remove(task)
        logger.debug("Task deleted id=%s", task_id)
        return task

    def list(self, status_filter: ListFilter | str = ListFilter.ALL) -> list[Task]:
        flt = ListFilter.parse(str(status_filter))
        if flt is ListFilter.ALL:
            return list(self._tasks)
        return [t for t in self._tasks if t.status.value == flt.value]


def load_tasks(path: str | Path = DEFAULT_STORE_PATH) -> TaskRepository:
    """
    Read the store file into a repository.

    A missing file is an empty store. Bytes that are not valid UTF-8 are kept
    as surrogate escapes so save_tasks() writes them back unchanged. Read
    failures are logged and produce an empty store.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Store %s does not exist yet; starting empty.", path)
        return TaskRepository()

    try:
        content = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        logger.error("Error reading tasks file %s: %s", path, e)
        return TaskRepository()

    repo = TaskRepository(decode_tasks(content))
    logger.debug("Loaded %d task(s) from %s", len(repo), path)
    return repo


def save_tasks(repo: TaskRepository, path: str | Path = DEFAULT_STORE_PATH) -> bool:
    """
    Overwrite the store file with the full task list.

    Writes a sibling temp file and renames it over the target. Returns False
    (after logging) when the write fails.
    """
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
            f.write(encode_tasks(repo))
        os.replace(tmp, path)
    except OSError as e:
        logger.error("Error saving tasks to file %s: %s", path, e)
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        return False

    logger.debug("Saved %d task(s) to %s", len(repo), path)
    return True
