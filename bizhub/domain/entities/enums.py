"""
Tenancy Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant lifecycle status (cancelled is terminal)"""

    active = "active"
    suspended = "suspended"
    cancelled = "cancelled"


class MembershipRole(str, Enum):
    """Role within a tenant, strictly ordered owner > admin > manager > employee"""

    owner = "owner"
    admin = "admin"
    manager = "manager"
    employee = "employee"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def outranks(self, other: "MembershipRole") -> bool:
        return self.rank > other.rank


_ROLE_RANK = {
    MembershipRole.owner: 4,
    MembershipRole.admin: 3,
    MembershipRole.manager: 2,
    MembershipRole.employee: 1,
}


class MembershipStatus(str, Enum):
    """Membership status"""

    pending = "pending"
    active = "active"
    inactive = "inactive"


class SubscriptionStatus(str, Enum):
    """Subscription status, owned by billing"""

    pending = "pending"
    active = "active"
    cancelled = "cancelled"
    expired = "expired"
    trial = "trial"


class CatalogStatus(str, Enum):
    """Availability of segments and plans in the catalog"""

    active = "active"
    inactive = "inactive"


class BillingPeriod(str, Enum):
    monthly = "monthly"
    yearly = "yearly"
