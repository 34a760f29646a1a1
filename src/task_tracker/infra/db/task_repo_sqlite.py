from __future__ import annotations
from typing import Any, List

from sqlalchemy import Integer, String, Text, delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from task_tracker.domain.ports import TaskRecord


class Base(DeclarativeBase):
    pass


class TaskRow(Base):
    __tablename__ = "tasks"

    # surrogate key; the collection order lives in `position`
    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="todo")
    created_date: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    due_date: Mapped[str] = mapped_column(String(32), nullable=False, default="")

    def to_record(self) -> TaskRecord:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "created_date": self.created_date,
            "due_date": self.due_date,
        }


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class SQLiteTaskStore:
    """
    Same whole-collection contract as the JSON document, backed by one table.
    save() replaces every row inside a single transaction.
    """

    def __init__(self, engine: AsyncEngine, sessionmaker: async_sessionmaker[AsyncSession]):
        self.engine = engine
        self.sessionmaker = sessionmaker

    async def init(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def load(self) -> List[TaskRecord]:
        async with self.sessionmaker() as session:
            res = await session.execute(select(TaskRow).order_by(TaskRow.position))
            return [r.to_record() for r in res.scalars().all()]

    async def save(self, records: List[TaskRecord]) -> None:
        rows = [
            TaskRow(
                position=pos,
                id=_int(rec.get("id")),
                title=_str(rec.get("title")),
                description=_str(rec.get("description")),
                priority=_str(rec.get("priority")),
                status=_str(rec.get("status")),
                created_date=_str(rec.get("created_date")),
                due_date=_str(rec.get("due_date")),
            )
            for pos, rec in enumerate(records)
        ]
        async with self.sessionmaker() as session:
            async with session.begin():
                await session.execute(delete(TaskRow))
                session.add_all(rows)

    async def dispose(self) -> None:
        await self.engine.dispose()
