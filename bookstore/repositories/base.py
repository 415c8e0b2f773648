"""Generic Repository — typed CRUD over one ORM model, audited on every write.

Invariants:
    - Never commits or flushes implicitly except through flush()
    - add/update and the delete helper each append exactly one audit entry
      (update: only if something changed)
    - Reads that feed detail views use populate_existing so identity-map copies
      never hide rows changed earlier in the same session

Design Decisions:
    - Generic[ModelT] with a class-level `model`: static parametric typing, one
      subclass per entity, no runtime reflection
    - Ids assigned at add() time so the audit entry and join rows can reference
      the entity before the INSERT is flushed
"""

import uuid
from typing import Any, ClassVar, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from bookstore.db.base import Base
from bookstore.repositories.audit import AuditRecorder, FieldChanges

ModelT = TypeVar("ModelT", bound=Base)

_NO_ID = object()


class Repository(Generic[ModelT]):
    """CRUD gateway for a single entity type."""

    model: ClassVar[type]

    def __init__(self, session: AsyncSession, audit: AuditRecorder | None = None):
        self._session = session
        self._audit = audit or AuditRecorder(session)

    # ─── Reads ───────────────────────────────────────────────────

    async def get_by_id(
        self, entity_id: uuid.UUID, *options: ORMOption,
    ) -> ModelT | None:
        stmt = (
            select(self.model)
            .where(self.model.id == entity_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: Iterable[uuid.UUID]) -> list[ModelT]:
        id_list = list(dict.fromkeys(ids))
        if not id_list:
            return []
        result = await self._session.execute(
            select(self.model).where(self.model.id.in_(id_list)),
        )
        return list(result.scalars().all())

    async def find(
        self, *criteria: Any, order_by: Sequence[Any] = (),
        options: Sequence[ORMOption] = (),
    ) -> list[ModelT]:
        stmt = select(self.model).where(*criteria).options(*options)
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def exists(self, *criteria: Any) -> bool:
        stmt = select(exists().where(*criteria)) if criteria else select(
            exists().select_from(self.model),
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    # ─── Writes ──────────────────────────────────────────────────

    def add(self, entity: ModelT) -> ModelT:
        return self._stage_add(entity)

    def update(self, entity: ModelT, **fields: Any) -> FieldChanges:
        """Set fields on entity; returns {field: (old, new)} for those that changed."""
        return self._stage_update(entity, **fields)

    async def flush(self) -> None:
        await self._session.flush()

    # ─── Helpers shared with join-row writes ─────────────────────

    def _stage_update(self, entity: Any, **fields: Any) -> FieldChanges:
        changes: FieldChanges = {}
        for name, new in fields.items():
            old = getattr(entity, name)
            if old != new:
                setattr(entity, name, new)
                changes[name] = (old, new)
        self._audit.modified(entity, changes)
        return changes

    def _stage_add(self, entity: Any) -> Any:
        if getattr(entity, "id", _NO_ID) is None:
            entity.id = uuid.uuid4()
        self._session.add(entity)
        self._audit.added(entity)
        return entity

    async def _stage_delete(self, entity: Any) -> None:
        await self._session.delete(entity)
        self._audit.deleted(entity)
