"""
Remove Member Use Case

Deactivates a membership. Rows are never deleted so audit history keeps
pointing at real memberships.
"""

import logging
from typing import Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.role_policy import can_manage
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import (
    AuditEvent,
    MembershipRole,
    MembershipStatus,
    Principal,
)
from bizhub.domain.errors import (
    CannotRemoveOwnerError,
    InsufficientRoleError,
    MembershipNotFoundError,
    NotAuthenticatedError,
)
from bizhub.libs.result import Result, Return

from .dtos import RemoveMemberResponse

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing a member from a tenant.

    Business Rules:
    - Non-members get MembershipNotFoundError for any membership id
    - The owner can never be removed, whatever the actor's role
    - Only owner/admin can remove, and only lower-ranked members
    - Removing an already inactive membership succeeds without changes
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Optional[Principal], membership_id: UUID
    ) -> Result[RemoveMemberResponse]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            target = await self.uow.memberships.get_by_id(membership_id)
            if target is None:
                return Return.err(MembershipNotFoundError())

            context = await load_member_context(
                self.uow, target.tenant_id, principal.id
            )
            if context is None:
                return Return.err(MembershipNotFoundError())
            _, actor = context

            if target.role == MembershipRole.owner:
                return Return.err(CannotRemoveOwnerError())

            if not can_manage(actor.role, target.role):
                logger.warning(
                    f"User {principal.id} ({actor.role.value}) may not remove "
                    f"{target.role.value} from tenant {target.tenant_id}"
                )
                return Return.err(InsufficientRoleError())

            if target.status == MembershipStatus.inactive:
                return Return.ok(RemoveMemberResponse(status="removed"))

            target.status = MembershipStatus.inactive
            await self.uow.memberships.update(target)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=target.tenant_id,
                    user_id=principal.id,
                    action="member_removed",
                    event_metadata={
                        "membership_id": str(target.id),
                        "removed_user_id": str(target.user_id),
                        "role": target.role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(RemoveMemberResponse(status="removed"))
