"""
Check Domain Availability Use Case
"""

from typing import Optional

from bizhub.app.services.domain_verification import (
    DomainVerificationService,
    is_valid_domain,
    normalize_domain,
)
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import Principal
from bizhub.domain.errors import InvalidDomainError, NotAuthenticatedError
from bizhub.libs.result import Result, Return

from .dtos import DomainAvailabilityResponse


class CheckDomainAvailabilityUseCase:
    """
    Whether a domain is free to use.

    Business Rules:
    - Taken when any tenant, in any status, uses it as subdomain or custom domain
    - A storage failure is an error, never "available"
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Optional[Principal], domain: str
    ) -> Result[DomainAvailabilityResponse]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        domain = normalize_domain(domain)
        if not is_valid_domain(domain):
            return Return.err(InvalidDomainError(f"Invalid domain name: {domain!r}"))

        async with self.uow:
            service = DomainVerificationService(self.uow.tenants)
            result = await service.check_availability(domain)
            if result.is_err():
                return result

            return Return.ok(
                DomainAvailabilityResponse(domain=domain, available=result.value)
            )
