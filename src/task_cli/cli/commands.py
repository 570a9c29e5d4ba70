# src/task_cli/cli/commands.py

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from ..tasks.task_models import Task, TaskStatus
from ..tasks.task_store import TaskNotFoundError, TaskRepository

logger = logging.getLogger(__name__)

PROG = "task-cli"
USAGE_BANNER = f"Usage: {PROG} <command> [arguments...]"

_ID_RE = re.compile(r"^[+-]?\d+$")


class UsageError(Exception):
    """A known command was called with too few arguments."""

    def __init__(self, usage: str) -> None:
        super().__init__(f"Usage: {usage}")
        self.usage = usage


class InvalidTaskIdError(ValueError):
    def __init__(self, raw: str) -> None:
        super().__init__("Task ID must be a number.")
        self.raw = raw


@dataclass(slots=True)
class CommandResult:
    """Lines a command produced, split by destination stream."""

    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, *lines: str) -> CommandResult:
        return cls(stdout=list(lines))

    @classmethod
    def error(cls, *lines: str) -> CommandResult:
        return cls(stderr=list(lines))

    def emit(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        out = out or sys.stdout
        err = err or sys.stderr
        for line in self.stdout:
            print(line, file=out)
        for line in self.stderr:
            print(line, file=err)


CommandHandler = Callable[[TaskRepository, list[str]], CommandResult]


@dataclass(slots=True)
class _Command:
    handler: CommandHandler
    usage: str
    help_text: str
    min_args: int


class CommandRegistry:
    """Maps the first command-line token to one repository operation."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        usage: str,
        help_text: str,
        *,
        min_args: int = 0,
    ) -> None:
        self._commands[name.lower()] = _Command(
            handler=handler,
            usage=usage,
            help_text=help_text,
            min_args=min_args,
        )

    def names(self) -> list[str]:
        return list(self._commands)

    def handle(self, repo: TaskRepository, argv: Sequence[str]) -> CommandResult:
        """
        Run one command against the repository.

        Every failure is turned into a CommandResult here; nothing is raised
        to the caller, so the store can always be saved afterwards.
        """
        if not argv:
            return CommandResult.ok(USAGE_BANNER)

        name = argv[0].lower()
        args = list(argv[1:])

        cmd = self._commands.get(name)
        if cmd is None:
            logger.debug("Unknown command token=%r", name)
            # Unknown commands are reported on stdout.
            return CommandResult.ok(f"Error: Unknown command '{name}'")

        try:
            if len(args) < cmd.min_args:
                raise UsageError(cmd.usage)
            return cmd.handler(repo, args)
        except InvalidTaskIdError as e:
            logger.debug("Invalid task id %r for command %s", e.raw, name)
            return CommandResult.error(f"Error: {e}")
        except UsageError as e:
            return CommandResult.error(f"Error: Usage: {e.usage}")
        except TaskNotFoundError as e:
            return CommandResult.ok(f"Error: {e}")
        except Exception as e:
            logger.debug("Command %s failed", name, exc_info=True)
            return CommandResult.error(f"An unexpected error occurred: {e}")

    def build_help(self) -> str:
        lines = [USAGE_BANNER, "", "Commands:"]
        width = max((len(c.usage) for c in self._commands.values()), default=0)
        for cmd in self._commands.values():
            lines.append(f"  {cmd.usage.ljust(width)}  {cmd.help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_task_id(raw: str) -> int:
    raw = raw.strip()
    if not _ID_RE.match(raw):
        raise InvalidTaskIdError(raw)
    return int(raw)


def _printable(text: str) -> str:
    # Undecodable store bytes are shown as U+FFFD instead of breaking stdout.
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def format_task_line(task: Task) -> str:
    return (
        f"[{task.id}] [{task.status.value.upper()}] {_printable(task.description)}"
        f" (Updated: {task.updated_date})"
    )


# ---- handlers ----


def cmd_add(repo: TaskRepository, args: list[str]) -> CommandResult:
    task = repo.add(args[0])
    return CommandResult.ok(f"Task added successfully (ID: {task.id})")


def cmd_update(repo: TaskRepository, args: list[str]) -> CommandResult:
    task_id = parse_task_id(args[0])
    repo.update_description(task_id, args[1])
    return CommandResult.ok(f"Task {task_id} updated successfully.")


def cmd_delete(repo: TaskRepository, args: list[str]) -> CommandResult:
    task_id = parse_task_id(args[0])
    repo.delete(task_id)
    return CommandResult.ok(f"Task {task_id} deleted successfully.")


def _mark(status: TaskStatus) -> CommandHandler:
    def handler(repo: TaskRepository, args: list[str]) -> CommandResult:
        task_id = parse_task_id(args[0])
        repo.set_status(task_id, status)
        return CommandResult.ok(f"Task {task_id} marked as {status.label}.")

    return handler


cmd_mark_in_progress = _mark(TaskStatus.IN_PROGRESS)
cmd_mark_done = _mark(TaskStatus.DONE)


def cmd_list(repo: TaskRepository, args: list[str]) -> CommandResult:
    """
    list               -> every task
    list <status>      -> only tasks in that status
    Unknown selectors list everything but keep their own header.
    """
    selector = args[0].lower() if args else "all"
    tasks = repo.list(selector)

    lines = [f"--- Tasks ({selector.upper()}) ---"]
    if not tasks:
        lines.append("No tasks found.")
    else:
        lines.extend(format_task_line(t) for t in tasks)
    return CommandResult.ok(*lines)


def cmd_help(repo: TaskRepository, args: list[str]) -> CommandResult:
    return CommandResult.ok(registry.build_help())


registry.register(
    "add", cmd_add, f'{PROG} add "<description>"', "Add a new task.", min_args=1
)
registry.register(
    "update",
    cmd_update,
    f'{PROG} update <id> "<description>"',
    "Replace a task's description.",
    min_args=2,
)
registry.register("delete", cmd_delete, f"{PROG} delete <id>", "Delete a task.", min_args=1)
registry.register(
    "mark-in-progress",
    cmd_mark_in_progress,
    f"{PROG} mark-in-progress <id>",
    "Mark a task as in progress.",
    min_args=1,
)
registry.register(
    "mark-done", cmd_mark_done, f"{PROG} mark-done <id>", "Mark a task as done.", min_args=1
)
registry.register(
    "list",
    cmd_list,
    f"{PROG} list [all|todo|in-progress|done]",
    "List tasks, optionally by status.",
)
registry.register("help", cmd_help, f"{PROG} help", "Show this help.")
