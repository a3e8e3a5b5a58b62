"""
Update Permissions Use Case
"""

from typing import Dict, Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.role_policy import can_manage
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.capabilities import parse_overrides, resolve_capabilities
from bizhub.domain.entities import AuditEvent, MembershipStatus, Principal
from bizhub.domain.errors import (
    InsufficientRoleError,
    InvalidPermissionError,
    MembershipNotFoundError,
    NotAuthenticatedError,
)
from bizhub.libs.result import Result, Return

from .dtos import MembershipInfo


class UpdatePermissionsUseCase:
    """
    Replace the capability overrides of a membership.

    Business Rules:
    - Same authority as changing roles: owner/admin over lower-ranked members
    - Keys must be known capabilities, values booleans
    - An actor cannot grant a capability they do not hold themselves
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Optional[Principal],
        membership_id: UUID,
        permissions: Dict[str, bool],
    ) -> Result[MembershipInfo]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        try:
            overrides = parse_overrides(permissions)
        except ValueError as e:
            return Return.err(InvalidPermissionError(str(e)))

        async with self.uow:
            target = await self.uow.memberships.get_by_id(membership_id)
            if target is None or target.status == MembershipStatus.inactive:
                return Return.err(MembershipNotFoundError())

            context = await load_member_context(
                self.uow, target.tenant_id, principal.id
            )
            if context is None:
                return Return.err(MembershipNotFoundError())
            _, actor = context

            if not can_manage(actor.role, target.role):
                return Return.err(InsufficientRoleError())

            actor_capabilities = resolve_capabilities(actor.role, actor.permissions)
            granted = {cap for cap, allowed in overrides.items() if allowed}
            if not granted <= actor_capabilities:
                return Return.err(
                    InsufficientRoleError("Cannot grant a capability you do not hold")
                )

            old_permissions = dict(target.permissions or {})
            target.permissions = {cap.value: allowed for cap, allowed in overrides.items()}
            target = await self.uow.memberships.update(target)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=target.tenant_id,
                    user_id=principal.id,
                    action="permissions_changed",
                    event_metadata={
                        "membership_id": str(target.id),
                        "old_permissions": old_permissions,
                        "new_permissions": target.permissions,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(MembershipInfo.from_entity(target))
