from __future__ import annotations

import pytest

from task_tracker.domain.task_models import (
    Task,
    TaskPriority,
    TaskStatus,
    advance_status,
    normalize_priority,
    normalize_status,
    parse_due_date,
    task_from_record,
    task_to_record,
    tasks_from_records,
)


@pytest.mark.parametrize("raw", ["low", "medium", "high"])
def test_normalize_priority_is_identity_on_valid_values(raw: str) -> None:
    assert normalize_priority(raw) is TaskPriority(raw)
    assert normalize_priority(normalize_priority(raw)) is TaskPriority(raw)


@pytest.mark.parametrize("raw", ["", "  ", "urgent", "haute", None, 3])
def test_normalize_priority_defaults_to_medium(raw) -> None:
    assert normalize_priority(raw) is TaskPriority.medium


def test_normalizers_trim_and_lowercase() -> None:
    assert normalize_priority("  HIGH ") is TaskPriority.high
    assert normalize_status(" In_Progress") is TaskStatus.in_progress


@pytest.mark.parametrize("raw", ["", "doing", "in progress", "terminée", None])
def test_normalize_status_defaults_to_todo(raw) -> None:
    assert normalize_status(raw) is TaskStatus.todo


def test_advance_status_is_a_three_cycle() -> None:
    for status in TaskStatus:
        once = advance_status(status)
        assert once is not status
        assert advance_status(advance_status(once)) is status

    assert advance_status("todo") is TaskStatus.in_progress
    assert advance_status("in_progress") is TaskStatus.done
    assert advance_status("done") is TaskStatus.todo


def test_advance_status_treats_garbage_as_todo() -> None:
    assert advance_status("whatever") is TaskStatus.in_progress


def test_parse_due_date() -> None:
    assert parse_due_date("2026-10-19").isoformat() == "2026-10-19"
    assert parse_due_date(" 2026-10-19 ") is not None
    assert parse_due_date("") is None
    assert parse_due_date(None) is None
    assert parse_due_date("not-a-date") is None
    assert parse_due_date("2026-02-30") is None


def test_task_from_record_normalizes_untrusted_fields() -> None:
    task = task_from_record(
        {"id": "7", "title": "Ship", "priority": "URGENT", "status": "blocked", "created_date": "2026-01-01"}
    )
    assert task is not None
    assert task.id == 7
    assert task.priority is TaskPriority.medium
    assert task.status is TaskStatus.todo
    assert task.description == ""
    assert task.due_date == ""


def test_task_from_record_reads_legacy_french_documents() -> None:
    task = task_from_record(
        {
            "id": 3,
            "titre": "Réviser l'examen",
            "description": "Chapitres 1 à 4",
            "priorité": "haute",
            "statut": "en cours",
            "date_creation": "2025-12-01",
            "date_limite": "2025-12-15",
        }
    )
    assert task == Task(
        id=3,
        title="Réviser l'examen",
        description="Chapitres 1 à 4",
        priority=TaskPriority.high,
        status=TaskStatus.in_progress,
        created_date="2025-12-01",
        due_date="2025-12-15",
    )


def test_canonical_key_wins_over_legacy_alias() -> None:
    task = task_from_record({"id": 1, "title": "new", "titre": "old", "created_date": ""})
    assert task.title == "new"


def test_records_without_usable_id_are_dropped() -> None:
    records = [{"id": 1, "title": "ok"}, {"id": "x"}, {"id": 0}, {"title": "no id"}, "junk", {"id": True}]
    tasks = tasks_from_records(records)
    assert [t.id for t in tasks] == [1]


def test_task_to_record_uses_plain_text_values() -> None:
    task = Task(id=1, title="A", priority=TaskPriority.high, status=TaskStatus.done, created_date="2026-10-19")
    assert task_to_record(task) == {
        "id": 1,
        "title": "A",
        "description": "",
        "priority": "high",
        "status": "done",
        "created_date": "2026-10-19",
        "due_date": "",
    }


def test_normalizers_are_identity_on_enum_members() -> None:
    for status in TaskStatus:
        assert normalize_status(status) is status
    for priority in TaskPriority:
        assert normalize_priority(priority) is priority


def test_advance_status_reaches_done_from_task_field() -> None:
    task = Task(id=1, title="A", created_date="2026-10-19")
    seen = []
    for _ in range(3):
        task.status = advance_status(task.status)
        seen.append(task.status.value)
    assert seen == ["in_progress", "done", "todo"]


@pytest.mark.parametrize("title", ["", "   ", None])
def test_records_with_blank_title_are_dropped(title) -> None:
    assert task_from_record({"id": 4, "title": title, "created_date": "2026-10-19"}) is None
    assert task_from_record({"id": 4, "titre": title}) is None
