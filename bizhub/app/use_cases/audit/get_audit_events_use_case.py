"""
Get Audit Events Use Case

Retrieves provisioning and membership audit events for a tenant with pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.capabilities import Capability, resolve_capabilities
from bizhub.domain.entities import Principal
from bizhub.domain.errors import (
    InsufficientRoleError,
    NotAuthenticatedError,
    TenantNotFoundError,
)
from bizhub.libs.result import Result, Return


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a tenant.

    Business Rules:
    - Caller needs the view_audit_log capability
    - Results are tenant-scoped (only events for the tenant)
    - Results ordered by newest first
    - Supports cursor-based pagination
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Optional[Principal],
        tenant_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            principal: Calling user
            tenant_id: Tenant UUID
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            _, membership = context

            capabilities = resolve_capabilities(membership.role, membership.permissions)
            if Capability.view_audit_log not in capabilities:
                return Return.err(
                    InsufficientRoleError("You do not have permission to view audit events")
                )

            events, next_cursor = await self.uow.audit_events.get_by_tenant_paginated(
                tenant_id, limit=limit, cursor=cursor
            )

            user_ids = {event.user_id for event in events if event.user_id}
            users = await self.uow.users.get_by_ids(list(user_ids)) if user_ids else []
            emails = {user.id: user.email for user in users}

            events_list = [
                {
                    "action": event.action,
                    "user_email": emails.get(event.user_id),
                    "timestamp": event.created_at.isoformat(),
                    "metadata": event.event_metadata or {},
                }
                for event in events
            ]

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
