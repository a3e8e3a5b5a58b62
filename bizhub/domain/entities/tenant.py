"""
Tenant Entity

One provisioned business instance on the platform.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import TenantStatus


def default_settings() -> Dict[str, Any]:
    return {
        "timezone": "America/Sao_Paulo",
        "language": "pt-BR",
        "notifications": {"email": True, "sms": False, "push": True},
    }


class Tenant(SQLModel, table=True):
    """
    Tenant entity - one business provisioned by its owner.

    Business Rules:
    - subdomain is unique across all tenants and never changes
    - custom_domain, when set, is unique across all tenants
    - owner_id is set at creation and immutable
    - An owner has at most one non-cancelled tenant (partial unique index)
    - Status moves active <-> suspended; cancelled is terminal (soft retirement)
    - A custom domain is pending until a reachability probe succeeds
    """

    __tablename__ = "business_tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    subscription_id: Optional[UUID] = Field(
        default=None, foreign_key="user_subscriptions.id"
    )
    segment_id: UUID = Field(foreign_key="business_segments.id", nullable=False)

    business_name: str = Field(max_length=255)
    business_slug: str = Field(max_length=40)
    subdomain: str = Field(unique=True, index=True, max_length=40)
    custom_domain: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=253
    )
    domain_verified: bool = Field(default=False)

    logo_url: Optional[str] = Field(default=None, max_length=2048)
    brand_colors: Dict[str, str] = Field(default_factory=dict, sa_column=Column(JSON))
    settings: Dict[str, Any] = Field(
        default_factory=default_settings, sa_column=Column(JSON)
    )

    status: TenantStatus = Field(default=TenantStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_tenant_owner_status", "owner_id", "status"),
        Index("idx_tenant_status", "status"),
        Index(
            "uq_tenant_open_owner",
            "owner_id",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )
