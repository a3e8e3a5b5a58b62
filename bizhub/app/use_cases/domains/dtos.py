"""
Domain Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class SetCustomDomainCommand(BaseModel):
    """None or empty clears the custom domain"""

    domain: Optional[str] = None


class DomainAvailabilityResponse(BaseModel):
    domain: str
    available: bool


class DomainVerificationResponse(BaseModel):
    domain: str
    verified: bool
