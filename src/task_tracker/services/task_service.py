import logging
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel

from task_tracker.domain.errors import TaskNotFoundError, TaskValidationError
from task_tracker.domain.ports import TaskStore
from task_tracker.domain.task_models import Task, TaskStats, task_to_record, tasks_from_records
from task_tracker.domain import task_rules

logger = logging.getLogger("tracker.tasks")


class TaskView(Task):
    overdue: bool = False


class TaskListing(BaseModel):
    items: List[TaskView]
    returned: int
    stats: TaskStats


class TaskService:
    """
    One call = one load of the whole collection, at most one mutation and one
    save when something actually changed.
    """

    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.clock = clock

    async def _load(self) -> List[Task]:
        return tasks_from_records(await self.store.load())

    async def _save(self, tasks: List[Task]) -> None:
        await self.store.save([task_to_record(t) for t in tasks])

    async def list_tasks(self, q: str = "", status: str = "", priority: str = "") -> TaskListing:
        tasks = await self._load()
        now = self.clock()
        shown = task_rules.filter_tasks(tasks, q, status, priority)
        items = [TaskView(**t.model_dump(), overdue=task_rules.is_overdue(t, now)) for t in shown]
        return TaskListing(items=items, returned=len(items), stats=task_rules.aggregate_stats(tasks, now))

    async def stats(self) -> TaskStats:
        return task_rules.aggregate_stats(await self._load(), self.clock())

    async def get_task(self, task_id: int) -> Optional[Task]:
        return task_rules.find_task(await self._load(), task_id)

    async def create_task(self, title: str, description: str = "", priority: str = "", due_date: str = "") -> Task:
        tasks = await self._load()
        try:
            task = task_rules.create_task(tasks, title, description, priority, due_date, today=self.clock().date())
        except TaskValidationError as e:
            logger.info("task.create.rejected", extra={"category": "tasks", "event": "task.create.rejected", "code": e.code})
            raise
        await self._save(tasks)
        logger.info("task.create", extra={"category": "tasks", "event": "task.create", "task_id": task.id, "title": task.title})
        return task

    async def advance_task(self, task_id: int, strict: bool = False) -> Optional[Task]:
        tasks = await self._load()
        task = task_rules.advance_task(tasks, task_id)
        if task is None:
            logger.info("task.advance.missing", extra={"category": "tasks", "event": "task.advance.missing", "task_id": task_id})
            if strict:
                raise TaskNotFoundError(task_id)
            return None
        await self._save(tasks)
        logger.info(
            "task.advance",
            extra={"category": "tasks", "event": "task.advance", "task_id": task_id, "status": task.status.value},
        )
        return task

    async def delete_task(self, task_id: int, strict: bool = False) -> bool:
        tasks = await self._load()
        kept = task_rules.delete_task(tasks, task_id)
        if len(kept) == len(tasks):
            logger.info("task.delete.missing", extra={"category": "tasks", "event": "task.delete.missing", "task_id": task_id})
            if strict:
                raise TaskNotFoundError(task_id)
            return False
        await self._save(kept)
        logger.info(
            "task.delete",
            extra={"category": "tasks", "event": "task.delete", "task_id": task_id, "removed": len(tasks) - len(kept)},
        )
        return True
