from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from task_tracker.config import load_settings
from task_tracker.observability.logging import JsonFormatter, setup_logging


def test_load_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("STORE_BACKEND", "SQLite")
    monkeypatch.setenv("DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "not-a-number")

    s = load_settings()
    assert s.store_backend == "sqlite"
    assert s.db_path == tmp_path / "x.db"
    assert s.log_level == "DEBUG"
    assert s.port == 8000


def test_load_settings_rejects_unknown_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORE_BACKEND", "postgres")
    with pytest.raises(ValueError):
        load_settings()


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("tracker.tasks", logging.INFO, __file__, 1, "task.create", None, None)
    record.category = "tasks"
    record.task_id = 3

    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "task.create"
    assert payload["level"] == "INFO"
    assert payload["category"] == "tasks"
    assert payload["task_id"] == 3
    assert "lineno" not in payload


def test_setup_logging_writes_jsonl(tmp_path: Path) -> None:
    path = setup_logging("INFO", tmp_path / "logs")
    logging.getLogger("tracker.system").info("hello", extra={"event": "hello"})
    for h in logging.getLogger().handlers:
        h.flush()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "hello"
