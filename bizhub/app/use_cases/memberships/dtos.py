"""
Membership Use Case DTOs (Data Transfer Objects)
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from bizhub.domain.entities import Membership


class MembershipInfo(BaseModel):
    """Membership as listed on the team screen"""

    id: str
    tenant_id: str
    user_id: str
    email: Optional[str] = None
    role: str
    status: str
    permissions: Dict[str, bool] = Field(default_factory=dict)
    invited_by: Optional[str] = None
    invited_at: Optional[str] = None
    joined_at: Optional[str] = None

    @classmethod
    def from_entity(
        cls, membership: Membership, email: Optional[str] = None
    ) -> "MembershipInfo":
        return cls(
            id=str(membership.id),
            tenant_id=str(membership.tenant_id),
            user_id=str(membership.user_id),
            email=email,
            role=membership.role.value,
            status=membership.status.value,
            permissions=dict(membership.permissions or {}),
            invited_by=str(membership.invited_by) if membership.invited_by else None,
            invited_at=membership.invited_at.isoformat() if membership.invited_at else None,
            joined_at=membership.joined_at.isoformat() if membership.joined_at else None,
        )


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str


class EffectiveRoleResponse(BaseModel):
    """Role and capabilities of the caller in a tenant; role is None for non-members"""

    tenant_id: str
    role: Optional[str] = None
    capabilities: List[str] = Field(default_factory=list)
