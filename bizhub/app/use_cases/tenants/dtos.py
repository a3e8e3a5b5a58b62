"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the tenant domain.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from bizhub.domain.entities import Tenant


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTenantCommand(BaseModel):
    """Business details submitted on onboarding"""

    business_name: str
    segment_id: UUID
    logo_url: Optional[str] = None
    brand_colors: Dict[str, str] = Field(default_factory=dict)
    settings: Dict[str, Any] = Field(default_factory=dict)


class UpdateTenantSettingsCommand(BaseModel):
    """Partial update; None leaves a field untouched"""

    business_name: Optional[str] = None
    logo_url: Optional[str] = None
    brand_colors: Optional[Dict[str, str]] = None
    settings: Optional[Dict[str, Any]] = None


# ============================================================================
# Response DTOs
# ============================================================================


class TenantInfo(BaseModel):
    """Tenant as presented to members"""

    id: str
    business_name: str
    business_slug: str
    subdomain: str
    custom_domain: Optional[str]
    domain_verified: bool
    segment_id: str
    logo_url: Optional[str]
    brand_colors: Dict[str, str]
    settings: Dict[str, Any]
    status: str

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantInfo":
        return cls(
            id=str(tenant.id),
            business_name=tenant.business_name,
            business_slug=tenant.business_slug,
            subdomain=tenant.subdomain,
            custom_domain=tenant.custom_domain,
            domain_verified=tenant.domain_verified,
            segment_id=str(tenant.segment_id),
            logo_url=tenant.logo_url,
            brand_colors=dict(tenant.brand_colors or {}),
            settings=dict(tenant.settings or {}),
            status=tenant.status.value,
        )


class CreateTenantResponse(BaseModel):
    """Response for create tenant use case"""

    tenant: TenantInfo
    role: str


class CurrentTenantResponse(BaseModel):
    """Resolved tenant context; tenant is None when not provisioned yet"""

    tenant: Optional[TenantInfo] = None
    role: Optional[str] = None
    capabilities: List[str] = Field(default_factory=list)


class TenantStatusResponse(BaseModel):
    """Response for tenant status changes"""

    id: str
    status: str


class SegmentInfo(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str]


class FeatureResponse(BaseModel):
    feature: str
    enabled: bool
