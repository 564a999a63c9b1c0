"""Record store over an async SQLAlchemy session.

A thin per-entity repository with get/insert/update/remove and a small
fluent query builder. Every mutation is flushed immediately so subsequent
reads in the same session see it; committing is the caller's job.
"""

from __future__ import annotations

import operator
from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.errors import NotFoundError
from payroll_core.models import Base

ModelT = TypeVar("ModelT", bound=Base)

OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": lambda column, value: column.in_(value),
}


class RecordStore(Generic[ModelT]):
    """Repository for one ORM model."""

    def __init__(self, session: AsyncSession, model: type[ModelT], label: str | None = None):
        self.session = session
        self.model = model
        self.label = label or model.__name__

    async def get(self, record_id: Any) -> ModelT | None:
        """Get a record by primary key, or None."""
        return await self.session.get(self.model, record_id)

    async def insert(self, data: Mapping[str, Any]) -> ModelT:
        """Insert a new record and return it with defaults populated."""
        record = self.model(**data)
        self.session.add(record)
        await self.session.flush()
        return record

    async def update(self, record_id: Any, changes: Mapping[str, Any]) -> ModelT:
        """Apply changes to an existing record."""
        record = await self.get(record_id)
        if record is None:
            raise NotFoundError(self.label, record_id)

        for field, value in changes.items():
            self._column(field)
            if value is None and not self.model.__table__.columns[field].nullable:
                raise ValueError(f"{self.label}.{field} cannot be null")
        for field, value in changes.items():
            setattr(record, field, value)
        await self.session.flush()
        return record

    async def remove(self, record_id: Any) -> None:
        """Delete a record."""
        record = await self.get(record_id)
        if record is None:
            raise NotFoundError(self.label, record_id)

        await self.session.delete(record)
        await self.session.flush()

    def query(self) -> RecordQuery[ModelT]:
        """Start a query over this model."""
        return RecordQuery(self)

    def _column(self, field: str) -> Any:
        if field not in self.model.__table__.columns:
            raise ValueError(f"{self.label} has no field '{field}'")
        return getattr(self.model, field)


class RecordQuery(Generic[ModelT]):
    """Fluent filter/sort/limit builder.

    Usage:
        checks = await store.query().where("employee_id", "=", emp_id).execute()
    """

    def __init__(self, store: RecordStore[ModelT]):
        self._store = store
        self._filters: list[Any] = []
        self._order_by: list[Any] = []
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> RecordQuery[ModelT]:
        """Add a filter; all filters are ANDed."""
        if op not in OPERATORS:
            raise ValueError(f"Unsupported operator '{op}'")
        column = self._store._column(field)
        self._filters.append(OPERATORS[op](column, value))
        return self

    def order_by(self, field: str, direction: str = "asc") -> RecordQuery[ModelT]:
        """Add a sort key."""
        column = self._store._column(field)
        if direction == "asc":
            self._order_by.append(column.asc())
        elif direction == "desc":
            self._order_by.append(column.desc())
        else:
            raise ValueError(f"Unsupported sort direction '{direction}'")
        return self

    def limit(self, n: int) -> RecordQuery[ModelT]:
        """Cap the number of returned records."""
        self._limit = n
        return self

    def _select(self) -> Select[Any]:
        stmt = select(self._store.model).where(*self._filters)
        if self._order_by:
            stmt = stmt.order_by(*self._order_by)
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        return stmt

    async def execute(self) -> list[ModelT]:
        """Return all matching records."""
        result = await self._store.session.execute(self._select())
        return list(result.scalars().all())

    async def first(self) -> ModelT | None:
        """Return the first matching record, or None."""
        result = await self._store.session.execute(self._select().limit(1))
        return result.scalars().first()

    async def count(self) -> int:
        """Count matching records, ignoring sort and limit."""
        stmt = select(func.count()).select_from(self._store.model).where(*self._filters)
        return await self._store.session.scalar(stmt) or 0
