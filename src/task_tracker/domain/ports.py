"""
Storage port used by the service layer.

A store persists the whole collection as an ordered list of plain records
(see task_models.task_to_record). It never interprets the records; the
service normalizes everything it loads.
"""

from __future__ import annotations

from typing import Any, Protocol

TaskRecord = dict[str, Any]


class TaskStore(Protocol):
    async def init(self) -> None: ...

    async def load(self) -> list[TaskRecord]: ...

    async def save(self, records: list[TaskRecord]) -> None: ...
