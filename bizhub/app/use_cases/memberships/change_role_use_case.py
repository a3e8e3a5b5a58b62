"""
Change Role Use Case

Owner/admin changes the role of a lower-ranked member.
"""

import logging
from typing import Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.role_policy import can_assign, can_manage, parse_role
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import (
    AuditEvent,
    MembershipRole,
    MembershipStatus,
    Principal,
)
from bizhub.domain.errors import (
    InsufficientRoleError,
    InvalidRoleError,
    MembershipNotFoundError,
    NotAuthenticatedError,
)
from bizhub.libs.result import Result, Return

from .dtos import MembershipInfo

logger = logging.getLogger(__name__)


class ChangeRoleUseCase:
    """
    Use case for changing a member's role.

    Business Rules:
    - Only owner/admin can change roles
    - The target must rank strictly below the actor
    - The new role must rank strictly below the actor (nobody becomes owner)
    - The owner's membership is never changed
    - Assigning the current role is a no-op
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Optional[Principal],
        membership_id: UUID,
        new_role: str,
    ) -> Result[MembershipInfo]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        role = parse_role(new_role)
        if role is None:
            return Return.err(InvalidRoleError(f"Invalid role: {new_role}"))

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

            if target.role == MembershipRole.owner:
                return Return.err(
                    InsufficientRoleError("The owner's role cannot be changed")
                )

            if not can_manage(actor.role, target.role) or not can_assign(
                actor.role, role
            ):
                logger.warning(
                    f"User {principal.id} ({actor.role.value}) may not change "
                    f"{target.role.value} to {role.value} in tenant {target.tenant_id}"
                )
                return Return.err(InsufficientRoleError())

            if target.role == role:
                return Return.ok(MembershipInfo.from_entity(target))

            old_role = target.role
            target.role = role
            target = await self.uow.memberships.update(target)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=target.tenant_id,
                    user_id=principal.id,
                    action="role_changed",
                    event_metadata={
                        "membership_id": str(target.id),
                        "target_user_id": str(target.user_id),
                        "old_role": old_role.value,
                        "new_role": role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(MembershipInfo.from_entity(target))
