"""Audit Recorder — explicit append of AuditLog rows for every entity transition.

Invariants:
    - Called by repository write paths only, on the same AsyncSession as the
      change, so the audit row commits or rolls back with it
    - Added/Deleted record a state marker; Modified records field:old -> new pairs
    - A modification with no changed field records nothing
    - Entities without an own id (join rows) are recorded with NIL_ENTITY_ID

Design Decisions:
    - Explicit calls with before/after values instead of flush-event diffing:
      every write path states what changed
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.domain_types import AuditAction, NIL_ENTITY_ID
from bookstore.models.audit_log import AuditLog

logger = logging.getLogger(__name__)

FieldChanges = dict[str, tuple[Any, Any]]


def render_changes(changes: FieldChanges) -> str:
    return ";".join(f"{name}:{old} -> {new}" for name, (old, new) in changes.items())


class AuditRecorder:
    """Appends AuditLog rows to the caller's session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def added(self, entity: object) -> None:
        self._append(entity, AuditAction.ADDED, f"State:{AuditAction.ADDED.value}")

    def modified(self, entity: object, changes: FieldChanges) -> None:
        if not changes:
            return
        self._append(entity, AuditAction.MODIFIED, render_changes(changes))

    def deleted(self, entity: object) -> None:
        self._append(entity, AuditAction.DELETED, f"State:{AuditAction.DELETED.value}")

    def _append(self, entity: object, action: AuditAction, changes: str) -> None:
        entity_id = getattr(entity, "id", None) or NIL_ENTITY_ID
        self._session.add(AuditLog(
            entity_name=type(entity).__name__,
            entity_id=entity_id,
            action=action.value,
            changes=changes,
        ))
        logger.debug(
            f"Audit {action.value} {type(entity).__name__}",
            extra={"entity_id": str(entity_id)},
        )
