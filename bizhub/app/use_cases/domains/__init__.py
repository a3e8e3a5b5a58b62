"""
Domain Use Cases

Custom domain availability, assignment and verification.
"""

from .check_domain_availability_use_case import CheckDomainAvailabilityUseCase
from .dtos import (
    DomainAvailabilityResponse,
    DomainVerificationResponse,
    SetCustomDomainCommand,
)
from .set_custom_domain_use_case import SetCustomDomainUseCase
from .verify_custom_domain_use_case import VerifyCustomDomainUseCase

__all__ = [
    "CheckDomainAvailabilityUseCase",
    "SetCustomDomainUseCase",
    "VerifyCustomDomainUseCase",
    "DomainAvailabilityResponse",
    "DomainVerificationResponse",
    "SetCustomDomainCommand",
]
