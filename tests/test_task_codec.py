# tests/test_task_codec.py

from __future__ import annotations

import logging

import pytest

from task_cli.tasks.task_codec import decode_tasks, encode_task, encode_tasks
from task_cli.tasks.task_models import Task, TaskStatus

TS1 = "2024-05-01T10:00:00.000001"
TS2 = "2024-05-02T11:30:00.000002"


def _task(task_id: int, description: str, status: TaskStatus = TaskStatus.TODO) -> Task:
    return Task(
        id=task_id,
        description=description,
        status=status,
        created_at=TS1,
        updated_at=TS2,
    )


def test_encode_task_fixed_field_order() -> None:
    assert encode_task(_task(3, "Write report", TaskStatus.IN_PROGRESS)) == (
        '{"id":3,"description":"Write report","status":"in-progress",'
        f'"createdAt":"{TS1}","updatedAt":"{TS2}"}}'
    )


def test_encode_tasks_canonical_layout() -> None:
    text = encode_tasks([_task(1, "a"), _task(2, "b")])
    lines = text.split("\n")
    assert lines[0] == "["
    assert lines[1].startswith('{"id":1,') and lines[1].endswith("},")
    assert lines[2].startswith('{"id":2,') and lines[2].endswith("}")
    assert lines[3] == "]"


def test_encode_empty_store() -> None:
    assert encode_tasks([]) == "[\n\n]"
    assert decode_tasks(encode_tasks([])) == []


def test_encode_escapes_only_double_quotes() -> None:
    encoded = encode_task(_task(1, 'She said "hi" \\ tab\t'))
    assert '"description":"She said \\"hi\\" \\ tab\t"' in encoded


@pytest.mark.parametrize("content", ["", "   \n", "[]", "  []\n"])
def test_decode_empty_content(content: str) -> None:
    assert decode_tasks(content) == []


def test_decode_restores_tasks_in_order() -> None:
    tasks = [
        _task(5, "first"),
        _task(2, 'She said "hi"', TaskStatus.DONE),
        _task(9, "", TaskStatus.IN_PROGRESS),
    ]
    assert decode_tasks(encode_tasks(tasks)) == tasks


def test_decode_multiline_description() -> None:
    tasks = [_task(1, "line one\nline two")]
    assert decode_tasks(encode_tasks(tasks)) == tasks


def test_decode_tolerates_whitespace_between_objects() -> None:
    obj1 = encode_task(_task(1, "a"))
    obj2 = encode_task(_task(2, "b"))
    text = f"  [  {obj1} ,\n\n   {obj2}  ]\n"
    assert [t.id for t in decode_tasks(text)] == [1, 2]


def test_decode_skips_corrupt_id_and_continues(caplog: pytest.LogCaptureFixture) -> None:
    good = encode_task(_task(2, "kept"))
    bad = encode_task(_task(1, "dropped")).replace('"id":1', '"id":abc')
    text = f"[\n{bad},\n{good}\n]"

    with caplog.at_level(logging.WARNING, logger="task_cli"):
        tasks = decode_tasks(text)

    assert [t.id for t in tasks] == [2]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "abc" in warnings[0].getMessage()


def test_decode_skips_unknown_status(caplog: pytest.LogCaptureFixture) -> None:
    bad = encode_task(_task(1, "x")).replace('"status":"todo"', '"status":"blocked"')
    good = encode_task(_task(2, "y"))

    with caplog.at_level(logging.WARNING, logger="task_cli"):
        tasks = decode_tasks(f"[\n{bad},\n{good}\n]")

    assert [t.id for t in tasks] == [2]
    assert any("blocked" in r.getMessage() for r in caplog.records)


def test_decode_skips_duplicate_ids(caplog: pytest.LogCaptureFixture) -> None:
    text = encode_tasks([_task(1, "first"), _task(1, "second")])

    with caplog.at_level(logging.WARNING, logger="task_cli"):
        tasks = decode_tasks(text)

    assert [t.description for t in tasks] == ["first"]
    assert any("Duplicate" in r.getMessage() for r in caplog.records)


def test_decode_keeps_foreign_timestamp_text() -> None:
    text = (
        '[\n{"id":1,"description":"x","status":"todo",'
        '"createdAt":"2024-01-01T08:00:00.123456789","updatedAt":"2024-01-01T08:00:00.123456789"}\n]'
    )
    (task,) = decode_tasks(text)
    assert task.created_at == "2024-01-01T08:00:00.123456789"
    assert task.updated_date == "2024-01-01"


@pytest.mark.parametrize("raw_id", ["-5", "0", "+3"])
def test_decode_skips_non_positive_or_signed_ids(
    raw_id: str, caplog: pytest.LogCaptureFixture
) -> None:
    bad = encode_task(_task(1, "dropped")).replace('"id":1', f'"id":{raw_id}')
    good = encode_task(_task(2, "kept"))

    with caplog.at_level(logging.WARNING, logger="task_cli"):
        tasks = decode_tasks(f"[\n{bad},\n{good}\n]")

    assert [t.id for t in tasks] == [2]
    assert any("Corrupt task id" in r.getMessage() for r in caplog.records)


def test_decode_normalizes_status_case() -> None:
    text = encode_task(_task(1, "x")).replace('"status":"todo"', '"status":"Done"')
    (task,) = decode_tasks(f"[\n{text}\n]")
    assert task.status is TaskStatus.DONE
