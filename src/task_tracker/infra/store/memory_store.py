from __future__ import annotations
import copy
from typing import List, Optional

from task_tracker.domain.ports import TaskRecord


class InMemoryTaskStore:
    """
    Process-local store, used by tests and `STORE_BACKEND=memory`.
    Records are deep-copied in and out so callers never share state with it.
    """
    def __init__(self, records: Optional[List[TaskRecord]] = None):
        self._records: List[TaskRecord] = copy.deepcopy(records or [])
        self.saves = 0

    async def init(self) -> None:
        return None

    async def load(self) -> List[TaskRecord]:
        return copy.deepcopy(self._records)

    async def save(self, records: List[TaskRecord]) -> None:
        self._records = copy.deepcopy(list(records))
        self.saves += 1
