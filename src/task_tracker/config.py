"""Settings read from environment variables.

One frozen Settings object is built at app start (create_app) and passed down;
nothing reads the environment at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

STORE_BACKENDS = ("json", "sqlite", "memory")


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    store_backend: str = "json"
    data_file: Path = Path("./data/tasks.json")
    db_path: Path = Path("./data/tasks.db")
    log_level: str = "INFO"
    log_dir: Path = Path("./logs")
    host: str = "127.0.0.1"
    port: int = 8000


def load_settings() -> Settings:
    backend = _env("STORE_BACKEND", "json").lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}")

    return Settings(
        store_backend=backend,
        data_file=Path(_env("DATA_FILE", "./data/tasks.json")).expanduser(),
        db_path=Path(_env("DB_PATH", "./data/tasks.db")).expanduser(),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        log_dir=Path(_env("LOG_DIR", "./logs")).expanduser(),
        host=_env("HOST", "127.0.0.1"),
        port=_env_int("PORT", 8000),
    )
