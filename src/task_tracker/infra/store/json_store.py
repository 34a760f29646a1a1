from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List

from task_tracker.domain.ports import TaskRecord

logger = logging.getLogger("tracker.store")


class JsonFileTaskStore:
    """
    Whole collection in one pretty-printed JSON array.

    Every save rewrites the document (temp file + os.replace); concurrent writers
    are last-write-wins.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def init(self) -> None:
        self._ensure_file()

    def _ensure_file(self) -> None:
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write([])
        logger.info("store.created", extra={"category": "store", "event": "store.created", "path": str(self.path)})

    def _write(self, records: List[TaskRecord]) -> None:
        payload = json.dumps(records, ensure_ascii=False, indent=4)
        fd, tmp = tempfile.mkstemp(prefix=".tasks-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    async def load(self) -> List[TaskRecord]:
        try:
            self._ensure_file()
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw or "[]")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "store.unreadable",
                extra={"category": "store", "event": "store.unreadable", "path": str(self.path), "error": str(e)},
            )
            return []

        if not isinstance(data, list):
            logger.warning(
                "store.unreadable",
                extra={"category": "store", "event": "store.unreadable", "path": str(self.path), "error": "top level is not a list"},
            )
            return []
        return data

    async def save(self, records: List[TaskRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(list(records))
