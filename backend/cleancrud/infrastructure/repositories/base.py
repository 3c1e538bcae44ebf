"""Generic Repository — SQLAlchemy implementation of core Repository[E].

Invariants:
    - Works on domain entities at the boundary, ORM records inside
    - Every write flushes (constraint errors surface in the handler's call)
      but never commits: the mediator owns the unit of work
    - update() merges a fresh record: collections mapped by the subclass are
      replaced, delete-orphan cascades drop removed children

Design Decisions:
    - Subclasses supply record_type, _to_domain and _to_record; everything
      else is shared so a new aggregate needs only its mapping
    - list() orders newest first (created_at desc) for stable paging
    - Postponed annotations: the list() method shadows the builtin in the
      class body, so list[E] must not be evaluated there
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

E = TypeVar("E")
R = TypeVar("R")


class SqlRepository(Generic[E, R]):
    """Async CRUD for one aggregate kind over one ORM record type."""

    record_type: type[R]

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── mapping (subclass) ─────────────────────────────────────

    def _to_domain(self, record: R) -> E:
        raise NotImplementedError

    def _to_record(self, entity: E) -> R:
        raise NotImplementedError

    # ─── generic operations ─────────────────────────────────────

    async def add(self, entity: E) -> None:
        self.db.add(self._to_record(entity))
        await self.db.flush()

    async def get(self, entity_id: UUID) -> E | None:
        record = await self.db.get(self.record_type, entity_id)
        return self._to_domain(record) if record else None

    async def list(self, offset: int = 0, limit: int = 20) -> list[E]:
        return await self._list_where(offset=offset, limit=limit)

    async def count(self) -> int:
        return await self._count_where()

    async def update(self, entity: E) -> None:
        await self.db.merge(self._to_record(entity))
        await self.db.flush()

    async def delete(self, entity_id: UUID) -> bool:
        record = await self.db.get(self.record_type, entity_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.flush()
        return True

    async def exists(self, entity_id: UUID) -> bool:
        result = await self.db.execute(
            select(self.record_type.id).where(self.record_type.id == entity_id),
        )
        return result.scalar_one_or_none() is not None

    # ─── helpers for narrow repositories ────────────────────────

    async def _first_where(self, *criteria: Any) -> E | None:
        result = await self.db.execute(
            select(self.record_type).where(*criteria).limit(1),
        )
        record = result.scalars().first()
        return self._to_domain(record) if record else None

    async def _list_where(
        self, *criteria: Any, offset: int = 0, limit: int = 20,
    ) -> list[E]:
        query = (
            select(self.record_type)
            .where(*criteria)
            .order_by(self.record_type.created_at.desc(), self.record_type.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return [self._to_domain(r) for r in result.scalars().all()]

    async def _count_where(self, *criteria: Any) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(self.record_type).where(*criteria),
        )
        return result.scalar_one()
