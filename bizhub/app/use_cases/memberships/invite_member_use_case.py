"""
Invite Member Use Case

Adds an existing account to a tenant with a role.
"""

import logging
from typing import Optional
from uuid import UUID

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.role_policy import can_invite, parse_role
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.base import utcnow
from bizhub.domain.capabilities import Capability, resolve_capabilities
from bizhub.domain.entities import (
    AuditEvent,
    Membership,
    MembershipStatus,
    Principal,
)
from bizhub.domain.errors import (
    AlreadyMemberError,
    InsufficientRoleError,
    InvalidRoleError,
    NotAuthenticatedError,
    PrincipalNotFoundError,
    TenantNotFoundError,
)
from bizhub.libs.result import Result, Return

from .dtos import MembershipInfo

logger = logging.getLogger(__name__)


class InviteMemberUseCase:
    """
    Use case for inviting a user to a tenant.

    Business Rules:
    - Inviter needs the manage_members capability
    - Inviter may only grant a role strictly below their own; owner is never granted
    - Invitee must already have an account; unknown emails fail with
      PrincipalNotFoundError (no pending invitation records)
    - The membership is active immediately, joined_at = invitation time
    - An inactive membership of the same user is reactivated with the new role
    - An active or pending membership fails with AlreadyMemberError
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Optional[Principal],
        tenant_id: UUID,
        email: str,
        role: str,
    ) -> Result[MembershipInfo]:
        """
        Execute invite member use case.

        Args:
            principal: User sending the invite
            tenant_id: Target tenant ID
            email: Email of the account to add
            role: Role to assign (admin/manager/employee)

        Returns:
            Result with MembershipInfo, or Error
        """
        if principal is None:
            return Return.err(NotAuthenticatedError())

        membership_role = parse_role(role)
        if membership_role is None:
            return Return.err(InvalidRoleError(f"Invalid role: {role}"))

        email = email.strip().lower()

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            _, inviter = context

            capabilities = resolve_capabilities(inviter.role, inviter.permissions)
            if Capability.manage_members not in capabilities or not can_invite(
                inviter.role, membership_role
            ):
                logger.warning(
                    f"User {principal.id} ({inviter.role.value}) may not invite "
                    f"{membership_role.value} into tenant {tenant_id}"
                )
                return Return.err(
                    InsufficientRoleError(
                        f"A {inviter.role.value} cannot invite a {membership_role.value}"
                    )
                )

            invitee = await self.uow.users.get_by_email(email)
            if invitee is None:
                return Return.err(PrincipalNotFoundError())

            now = utcnow()
            existing = await self.uow.memberships.get_by_user_and_tenant(
                invitee.id, tenant_id
            )

            if existing is not None:
                if existing.status != MembershipStatus.inactive:
                    return Return.err(AlreadyMemberError())
                existing.role = membership_role
                existing.status = MembershipStatus.active
                existing.permissions = {}
                existing.invited_by = principal.id
                existing.invited_at = now
                existing.joined_at = now
                membership = await self.uow.memberships.update(existing)
                action = "member_reactivated"
            else:
                try:
                    membership = await self.uow.memberships.create(
                        Membership(
                            tenant_id=tenant_id,
                            user_id=invitee.id,
                            role=membership_role,
                            status=MembershipStatus.active,
                            invited_by=principal.id,
                            invited_at=now,
                            joined_at=now,
                        )
                    )
                except DuplicateKeyError:
                    return Return.err(AlreadyMemberError())
                action = "member_invited"

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=principal.id,
                    action=action,
                    event_metadata={
                        "membership_id": str(membership.id),
                        "invited_email": email,
                        "role": membership_role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(MembershipInfo.from_entity(membership, email=invitee.email))
