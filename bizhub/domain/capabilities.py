"""
Capabilities

Fine-grained actions a member may perform inside a tenant. Each role carries a
default set; a membership's ``permissions`` mapping can grant or revoke single
capabilities for non-owner roles.
"""

from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional

from .entities.enums import MembershipRole


class Capability(str, Enum):
    manage_members = "manage_members"
    manage_settings = "manage_settings"
    manage_domain = "manage_domain"
    view_audit_log = "view_audit_log"
    manage_companies = "manage_companies"
    manage_employees = "manage_employees"
    manage_services = "manage_services"
    view_reports = "view_reports"


ALL_CAPABILITIES: FrozenSet[Capability] = frozenset(Capability)

DEFAULT_CAPABILITIES: Dict[MembershipRole, FrozenSet[Capability]] = {
    MembershipRole.owner: ALL_CAPABILITIES,
    MembershipRole.admin: ALL_CAPABILITIES,
    MembershipRole.manager: frozenset(
        {
            Capability.manage_members,
            Capability.manage_companies,
            Capability.manage_employees,
            Capability.manage_services,
            Capability.view_reports,
        }
    ),
    MembershipRole.employee: frozenset({Capability.manage_services}),
}


def parse_overrides(raw: Optional[Mapping[str, bool]]) -> Dict[Capability, bool]:
    """
    Convert a stored ``permissions`` mapping into typed overrides.

    Raises:
        ValueError: if a key is not a known capability or a value is not a bool
    """
    overrides: Dict[Capability, bool] = {}
    for key, granted in (raw or {}).items():
        capability = Capability(key)
        if not isinstance(granted, bool):
            raise ValueError(f"Permission {key} must be true or false")
        overrides[capability] = granted
    return overrides


def resolve_capabilities(
    role: MembershipRole, permissions: Optional[Mapping[str, bool]] = None
) -> FrozenSet[Capability]:
    """Effective capability set for a role plus its overrides"""
    if role == MembershipRole.owner:
        return ALL_CAPABILITIES

    capabilities = set(DEFAULT_CAPABILITIES[role])
    for key, granted in (permissions or {}).items():
        try:
            capability = Capability(key)
        except ValueError:
            # Unknown keys in stored rows grant nothing
            continue
        if granted is True:
            capabilities.add(capability)
        else:
            capabilities.discard(capability)
    return frozenset(capabilities)
