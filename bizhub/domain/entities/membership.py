"""
Membership Entity

Links a User to a Tenant with a role.
"""

from datetime import datetime
from typing import Dict, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import MembershipRole, MembershipStatus


class Membership(SQLModel, table=True):
    """
    Membership entity - links User to Tenant with a role.

    Business Rules:
    - (tenant_id, user_id) must be unique
    - Exactly one owner membership per tenant, created with the tenant
    - Removal sets status=inactive, rows are never deleted
    - permissions overrides single capabilities for non-owner roles
    """

    __tablename__ = "tenant_users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="business_tenants.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    permissions: Dict[str, bool] = Field(default_factory=dict, sa_column=Column(JSON))
    status: MembershipStatus = Field(default=MembershipStatus.active)

    invited_by: Optional[UUID] = Field(default=None, foreign_key="users.id")
    invited_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_membership_tenant_user", "tenant_id", "user_id", unique=True),
        Index("idx_membership_status", "status"),
    )
