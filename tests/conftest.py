# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_tracker.app.main import create_app
from task_tracker.config import Settings
from task_tracker.infra.store.memory_store import InMemoryTaskStore
from task_tracker.services.task_service import TaskService

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every file (data, db, logs) into the per-test tmp dir."""
    return Settings(
        store_backend="json",
        data_file=tmp_path / "data" / "tasks.json",
        db_path=tmp_path / "data" / "tasks.db",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def service(memory_store: InMemoryTaskStore) -> TaskService:
    return TaskService(memory_store, clock=lambda: NOW)


@pytest.fixture()
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
