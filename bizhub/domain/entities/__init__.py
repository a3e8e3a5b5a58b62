"""
Tenancy Domain Entities

All domain entities organized by model.
"""

# Export all enums
from .enums import (
    BillingPeriod,
    CatalogStatus,
    MembershipRole,
    MembershipStatus,
    SubscriptionStatus,
    TenantStatus,
)

# Export all entities
from .user import User
from .segment import Segment
from .subscription import Subscription, SubscriptionPlan
from .tenant import Tenant
from .membership import Membership
from .audit_event import AuditEvent
from .principal import Principal

__all__ = [
    # Enums
    "BillingPeriod",
    "CatalogStatus",
    "MembershipRole",
    "MembershipStatus",
    "SubscriptionStatus",
    "TenantStatus",
    # Entities
    "User",
    "Segment",
    "Subscription",
    "SubscriptionPlan",
    "Tenant",
    "Membership",
    "AuditEvent",
    "Principal",
]
