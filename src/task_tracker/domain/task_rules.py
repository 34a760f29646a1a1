from __future__ import annotations
from datetime import date, datetime, time
from typing import List, Optional, Sequence

from task_tracker.domain.errors import EmptyTitleError, InvalidDeadlineError, TaskNotFoundError
from task_tracker.domain.task_models import (
    Task,
    TaskStats,
    TaskStatus,
    advance_status,
    normalize_priority,
    normalize_status,
    parse_due_date,
)

END_OF_DAY = time(23, 59, 59)


# --- overdue / stats ---

def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    """
    True when the task is not done and `now` is past 23:59:59 local time on its
    due date. Missing or unparseable due dates never count as overdue.
    """
    if normalize_status(task.status) is TaskStatus.done:
        return False
    due = parse_due_date(task.due_date)
    if due is None:
        return False
    now = now or datetime.now()
    return now > datetime.combine(due, END_OF_DAY)


def aggregate_stats(tasks: Sequence[Task], now: Optional[datetime] = None) -> TaskStats:
    now = now or datetime.now()
    total = len(tasks)
    done = sum(1 for t in tasks if normalize_status(t.status) is TaskStatus.done)
    overdue = sum(1 for t in tasks if is_overdue(t, now))
    percent = round(100 * done / total, 1) if total else 0.0
    return TaskStats(total=total, done=done, overdue=overdue, percent_done=percent)


# --- query ---

def matches_keyword(task: Task, query: str) -> bool:
    q = (query or "").strip().lower()
    if not q:
        return True
    return q in (task.title or "").lower() or q in (task.description or "").lower()


def filter_tasks(
    tasks: Sequence[Task],
    query: str = "",
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> List[Task]:
    want_status = normalize_status(status) if status and status.strip() else None
    want_priority = normalize_priority(priority) if priority and priority.strip() else None

    out: List[Task] = []
    for t in tasks:
        if not matches_keyword(t, query):
            continue
        if want_status is not None and normalize_status(t.status) is not want_status:
            continue
        if want_priority is not None and normalize_priority(t.priority) is not want_priority:
            continue
        out.append(t)
    return out


# --- mutations ---

def next_id(tasks: Sequence[Task]) -> int:
    return 1 + max((t.id for t in tasks), default=0)


def find_task(tasks: Sequence[Task], task_id: int) -> Optional[Task]:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def create_task(
    tasks: List[Task],
    title: str,
    description: str = "",
    priority_raw: str = "",
    due_date_raw: str = "",
    today: Optional[date] = None,
) -> Task:
    """Validate input, append a new `todo` task to `tasks` and return it."""
    title = (title or "").strip()
    if not title:
        raise EmptyTitleError()

    due = (due_date_raw or "").strip()
    if due and parse_due_date(due) is None:
        raise InvalidDeadlineError(due)

    task = Task(
        id=next_id(tasks),
        title=title,
        description=(description or "").strip(),
        priority=normalize_priority(priority_raw),
        status=TaskStatus.todo,
        created_date=(today or date.today()).isoformat(),
        due_date=due,
    )
    tasks.append(task)
    return task


def advance_task(tasks: List[Task], task_id: int, strict: bool = False) -> Optional[Task]:
    """
    Move the first task with `task_id` one step around the status cycle, in place.

    An unknown id is a no-op returning None, or TaskNotFoundError when `strict`.
    """
    for t in tasks:
        if t.id == task_id:
            t.status = advance_status(t.status)
            return t
    if strict:
        raise TaskNotFoundError(task_id)
    return None


def delete_task(tasks: Sequence[Task], task_id: int, strict: bool = False) -> List[Task]:
    """Return `tasks` without any task carrying `task_id`."""
    kept = [t for t in tasks if t.id != task_id]
    if strict and len(kept) == len(tasks):
        raise TaskNotFoundError(task_id)
    return kept
