"""
Role Policy

Pure authorization rules over the strict role order
owner > admin > manager > employee.
"""

from typing import Optional

from bizhub.domain.entities import MembershipRole

# Roles allowed to change or remove other memberships
MANAGING_ROLES = frozenset({MembershipRole.owner, MembershipRole.admin})


def parse_role(value: str) -> Optional[MembershipRole]:
    try:
        return MembershipRole(value)
    except ValueError:
        return None


def can_invite(actor_role: MembershipRole, role: MembershipRole) -> bool:
    """A member may only invite at a role strictly below their own; nobody invites an owner"""
    return role != MembershipRole.owner and actor_role.outranks(role)


def can_assign(actor_role: MembershipRole, new_role: MembershipRole) -> bool:
    """Owner/admin may assign roles strictly below their own"""
    return actor_role in MANAGING_ROLES and actor_role.outranks(new_role)


def can_manage(actor_role: MembershipRole, target_role: MembershipRole) -> bool:
    """
    Whether ``actor_role`` may modify or remove a membership holding
    ``target_role``. The owner's membership is never manageable.
    """
    if target_role == MembershipRole.owner:
        return False
    return actor_role in MANAGING_ROLES and actor_role.outranks(target_role)
