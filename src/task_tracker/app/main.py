from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from task_tracker.app.routes import pages, tasks
from task_tracker.app.middleware.access_log import AccessLogMiddleware
from task_tracker.config import Settings, load_settings
from task_tracker.domain.ports import TaskStore
from task_tracker.infra.db.sqlite import make_sqlite_url, make_engine, make_sessionmaker
from task_tracker.infra.db.task_repo_sqlite import SQLiteTaskStore
from task_tracker.infra.store.json_store import JsonFileTaskStore
from task_tracker.infra.store.memory_store import InMemoryTaskStore
from task_tracker.observability.logging import setup_logging
from task_tracker.services.task_service import TaskService

BASE_DIR = Path(__file__).resolve().parent
logger = logging.getLogger("tracker.system")


def make_store(settings: Settings) -> TaskStore:
    if settings.store_backend == "sqlite":
        engine = make_engine(make_sqlite_url(settings.db_path))
        return SQLiteTaskStore(engine, make_sessionmaker(engine))
    if settings.store_backend == "memory":
        return InMemoryTaskStore()
    return JsonFileTaskStore(settings.data_file)


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info("system.start", extra={"category": "system", "event": "system.start", "backend": settings.store_backend})

    app = FastAPI(title="Task Tracker")
    app.add_middleware(AccessLogMiddleware)

    # Static files (CSS)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    # --- store wiring ---
    store = store or make_store(settings)
    app.state.settings = settings
    app.state.task_service = TaskService(store)

    # Routers
    app.include_router(tasks.router)
    app.include_router(pages.router)

    @app.on_event("startup")
    async def _startup():
        await store.init()
        logger.info(
            "store.ready",
            extra={"category": "system", "event": "store.ready", "backend": settings.store_backend},
        )

    @app.on_event("shutdown")
    async def _shutdown():
        if isinstance(store, SQLiteTaskStore):
            await store.dispose()

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def run() -> None:
    import uvicorn

    settings = load_settings()
    uvicorn.run("task_tracker.app.main:create_app", factory=True, host=settings.host, port=settings.port)
