"""
Tenancy Error Taxonomy

Every failure a use case can report. Each error is a ``libs.result.Error``
with a stable code; the API maps codes to HTTP statuses.
"""

from typing import Optional

from bizhub.libs.result import Error


class TenancyError(Error):
    """Base class: subclasses pin the code and a default message"""

    code = "TENANCY_ERROR"
    default_message = "Tenancy operation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(self.code, message or self.default_message)


# Authentication


class NotAuthenticatedError(TenancyError):
    code = "NOT_AUTHENTICATED"
    default_message = "Authentication required"


# Membership policy


class DuplicateOwnerError(TenancyError):
    code = "DUPLICATE_OWNER"
    default_message = "An owner membership already exists for this tenant"


class InsufficientRoleError(TenancyError):
    code = "INSUFFICIENT_ROLE"
    default_message = "Your role does not allow this action"


class CannotRemoveOwnerError(TenancyError):
    code = "CANNOT_REMOVE_OWNER"
    default_message = "The tenant owner cannot be removed"


class PrincipalNotFoundError(TenancyError):
    code = "PRINCIPAL_NOT_FOUND"
    default_message = "User not found. Ask them to sign up first."


class AlreadyMemberError(TenancyError):
    code = "ALREADY_MEMBER"
    default_message = "User is already a member of this tenant"


class MembershipNotFoundError(TenancyError):
    code = "MEMBERSHIP_NOT_FOUND"
    default_message = "Membership not found"


class InvalidRoleError(TenancyError):
    code = "INVALID_ROLE"
    default_message = "Invalid role. Must be one of: owner, admin, manager, employee"


class InvalidPermissionError(TenancyError):
    code = "INVALID_PERMISSION"
    default_message = "Unknown capability in permissions override"


# Tenant provisioning


class AllocationExhaustedError(TenancyError):
    code = "ALLOCATION_EXHAUSTED"
    default_message = "Could not allocate a subdomain, please try again"


class TenantAlreadyExistsError(TenancyError):
    code = "TENANT_ALREADY_EXISTS"
    default_message = "You already own a business"


class TenantNotFoundError(TenancyError):
    code = "TENANT_NOT_FOUND"
    default_message = "Tenant not found"


class SegmentNotFoundError(TenancyError):
    code = "SEGMENT_NOT_FOUND"
    default_message = "Business segment not found"


class SubscriptionRequiredError(TenancyError):
    code = "SUBSCRIPTION_REQUIRED"
    default_message = "An active subscription is required"


class InvalidStatusTransitionError(TenancyError):
    code = "INVALID_STATUS_TRANSITION"
    default_message = "Tenant status transition is not allowed"


class InvalidBusinessNameError(TenancyError):
    code = "INVALID_BUSINESS_NAME"
    default_message = "Business name must not be empty"


# Plans and domains


class FeatureNotEnabledError(TenancyError):
    code = "FEATURE_NOT_ENABLED"
    default_message = "Your plan does not include this feature"


class InvalidDomainError(TenancyError):
    code = "INVALID_DOMAIN"
    default_message = "Invalid domain name"


class DomainUnavailableError(TenancyError):
    code = "DOMAIN_UNAVAILABLE"
    default_message = "Domain is already in use"


class CustomDomainNotSetError(TenancyError):
    code = "CUSTOM_DOMAIN_NOT_SET"
    default_message = "No custom domain configured"


# Infrastructure


class DataIntegrityError(TenancyError):
    code = "DATA_INTEGRITY_ERROR"
    default_message = "Inconsistent tenant data"


class StorageError(TenancyError):
    code = "STORAGE_ERROR"
    default_message = "Storage is unavailable"


class NetworkError(TenancyError):
    code = "NETWORK_ERROR"
    default_message = "Network request failed"


class RateLimitedError(TenancyError):
    code = "RATE_LIMITED"
    default_message = "Too many requests"
