from __future__ import annotations
from pydantic import BaseModel
from enum import Enum
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional
import logging

logger = logging.getLogger("tracker.store")


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    done = "done"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


# todo -> in_progress -> done -> todo
_STATUS_CYCLE = {
    TaskStatus.todo: TaskStatus.in_progress,
    TaskStatus.in_progress: TaskStatus.done,
    TaskStatus.done: TaskStatus.todo,
}


class Task(BaseModel):
    id: int
    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.todo
    created_date: str
    due_date: str = ""


class TaskStats(BaseModel):
    total: int = 0
    done: int = 0
    overdue: int = 0
    percent_done: float = 0.0


def _clean(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        # str() on a str-mixin member gives "TaskStatus.done"
        value = value.value
    return str(value).strip().lower()


def normalize_priority(value: Any) -> TaskPriority:
    try:
        return TaskPriority(_clean(value))
    except ValueError:
        return TaskPriority.medium


def normalize_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus(_clean(value))
    except ValueError:
        return TaskStatus.todo


def advance_status(current: Any) -> TaskStatus:
    return _STATUS_CYCLE[normalize_status(current)]


def parse_due_date(raw: Any) -> Optional[date]:
    """Parse an ISO calendar date (YYYY-MM-DD). Empty or invalid text gives None."""
    text = "" if raw is None else str(raw).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


# --- records <-> Task ---

# Documents written by the original PHP page used French keys and values.
LEGACY_FIELDS = {
    "titre": "title",
    "priorité": "priority",
    "priorite": "priority",
    "statut": "status",
    "date_creation": "created_date",
    "date_limite": "due_date",
}
LEGACY_PRIORITIES = {"basse": "low", "moyenne": "medium", "haute": "high"}
LEGACY_STATUSES = {"à faire": "todo", "en cours": "in_progress", "terminée": "done"}


def _canonical(record: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in record.items():
        name = LEGACY_FIELDS.get(key, key)
        # a canonical key wins over its legacy alias
        if name in out and name != key:
            continue
        out[name] = value

    prio = _clean(out.get("priority"))
    out["priority"] = LEGACY_PRIORITIES.get(prio, prio)
    stat = _clean(out.get("status"))
    out["status"] = LEGACY_STATUSES.get(stat, stat)
    return out


def _as_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        tid = int(value)
    except (TypeError, ValueError):
        return None
    return tid if tid > 0 else None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def task_from_record(record: Any) -> Optional[Task]:
    """
    Build a Task from an untyped stored record.

    Every field goes through the normalizer; stored priority/status values are
    never trusted. Records without a usable positive id or with a blank title
    are dropped.
    """
    if not isinstance(record, Mapping):
        logger.warning("record.dropped", extra={"category": "store", "event": "record.dropped", "reason": "not a mapping"})
        return None

    data = _canonical(record)
    tid = _as_id(data.get("id"))
    if tid is None:
        logger.warning(
            "record.dropped",
            extra={"category": "store", "event": "record.dropped", "reason": "bad id", "raw_id": repr(data.get("id"))},
        )
        return None

    title = _text(data.get("title"))
    if not title.strip():
        logger.warning(
            "record.dropped",
            extra={"category": "store", "event": "record.dropped", "reason": "empty title", "task_id": tid},
        )
        return None

    return Task(
        id=tid,
        title=title,
        description=_text(data.get("description")),
        priority=normalize_priority(data.get("priority")),
        status=normalize_status(data.get("status")),
        created_date=_text(data.get("created_date")),
        due_date=_text(data.get("due_date")).strip(),
    )


def tasks_from_records(records: Iterable[Any]) -> List[Task]:
    out: List[Task] = []
    for rec in records:
        task = task_from_record(rec)
        if task is not None:
            out.append(task)
    return out


def task_to_record(task: Task) -> dict[str, Any]:
    return task.model_dump(mode="json")
