import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.app.repositories.audit_event_repository import IAuditEventRepository
from bizhub.domain.entities import AuditEvent

_CURSOR_SEPARATOR = "|"


def encode_cursor(event: AuditEvent) -> str:
    raw = f"{event.created_at.isoformat()}{_CURSOR_SEPARATOR}{event.id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> Optional[Tuple[datetime, UUID]]:
    """(created_at, id) of the last event on the previous page, None if malformed"""
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii")).decode("utf-8")
        timestamp, event_id = raw.split(_CURSOR_SEPARATOR, 1)
        return datetime.fromisoformat(timestamp), UUID(event_id)
    except (ValueError, TypeError, UnicodeError):
        return None


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_tenant_paginated(
        self, tenant_id: UUID, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Get audit events for a tenant with keyset pagination.

        Cursor format: base64 of "<created_at ISO>|<event id>". Events sharing a
        timestamp are ordered by id so no page boundary drops one. A malformed
        cursor restarts from the newest event.
        """
        stmt = select(AuditEvent).where(AuditEvent.tenant_id == tenant_id)

        position = decode_cursor(cursor) if cursor else None
        if position is not None:
            created_at, event_id = position
            stmt = stmt.where(
                or_(
                    col(AuditEvent.created_at) < created_at,
                    and_(
                        col(AuditEvent.created_at) == created_at,
                        col(AuditEvent.id) < event_id,
                    ),
                )
            )

        stmt = stmt.order_by(
            col(AuditEvent.created_at).desc(), col(AuditEvent.id).desc()
        ).limit(limit + 1)

        result = await self.session.exec(stmt)
        events = list(result.all())

        next_cursor = None
        if len(events) > limit:
            events = events[:limit]
            next_cursor = encode_cursor(events[-1])

        return events, next_cursor
