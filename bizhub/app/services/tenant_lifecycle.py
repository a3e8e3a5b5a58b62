"""
Tenant Lifecycle

Status transitions: active <-> suspended, active|suspended -> cancelled.
Cancelled is terminal.
"""

from typing import Optional
from uuid import UUID

from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.base import utcnow
from bizhub.domain.entities import AuditEvent, Tenant, TenantStatus
from bizhub.domain.errors import InvalidStatusTransitionError
from bizhub.libs.result import Result, Return

ALLOWED_TRANSITIONS = {
    TenantStatus.active: frozenset({TenantStatus.suspended, TenantStatus.cancelled}),
    TenantStatus.suspended: frozenset({TenantStatus.active, TenantStatus.cancelled}),
    TenantStatus.cancelled: frozenset(),
}


def can_transition(current: TenantStatus, new: TenantStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


async def change_status(
    uow: UnitOfWork, tenant: Tenant, new_status: TenantStatus, actor_id: Optional[UUID]
) -> Result[Tenant]:
    """
    Move ``tenant`` to ``new_status`` and record it. Does not commit.

    Re-applying the current status is a no-op, except on cancelled tenants.
    """
    old_status = tenant.status
    if old_status == new_status and old_status != TenantStatus.cancelled:
        return Return.ok(tenant)
    if not can_transition(old_status, new_status):
        return Return.err(
            InvalidStatusTransitionError(
                f"Cannot change tenant status from {old_status.value} to {new_status.value}"
            )
        )

    tenant.status = new_status
    tenant.updated_at = utcnow()
    tenant = await uow.tenants.update(tenant)

    await uow.audit_events.create(
        AuditEvent(
            tenant_id=tenant.id,
            user_id=actor_id,
            action="tenant_status_changed",
            event_metadata={"old_status": old_status.value, "new_status": new_status.value},
        )
    )
    return Return.ok(tenant)
