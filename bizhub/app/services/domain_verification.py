"""
Domain Verification Service

Availability checks against stored subdomains/custom domains, and best-effort
reachability verification of a custom domain.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from bizhub.app.repositories.tenant_repository import ITenantRepository
from bizhub.domain.errors import StorageError
from bizhub.libs.result import Result, Return

logger = logging.getLogger(__name__)

_DOMAIN_PATTERN = re.compile(
    r"^(?=.{1,253}$)(?!-)[a-z0-9-]{1,63}(?<!-)(\.(?!-)[a-z0-9-]{1,63}(?<!-))+$"
)


def normalize_domain(domain: Optional[str]) -> str:
    return (domain or "").strip().lower().rstrip(".")


def is_valid_domain(domain: str) -> bool:
    """Hostname with at least two labels, e.g. shop.biz"""
    return bool(_DOMAIN_PATTERN.match(domain))


class IReachabilityProbe(ABC):
    """Checks whether a host answers HTTP requests"""

    @abstractmethod
    async def is_reachable(self, domain: str) -> bool:
        """
        Probe ``domain``.

        Returns:
            True on a successful response, False on any network failure
        """
        pass


class DomainVerificationService:
    def __init__(
        self, tenants: ITenantRepository, probe: Optional[IReachabilityProbe] = None
    ):
        self.tenants = tenants
        self.probe = probe

    async def check_availability(
        self, domain: str, ignore_tenant_id: Optional[UUID] = None
    ) -> Result[bool]:
        """
        True iff no tenant uses ``domain`` as subdomain or custom domain.

        Args:
            domain: Normalised domain
            ignore_tenant_id: Tenant whose own usage does not count

        Returns:
            Result with availability, or StorageError when storage cannot
            answer (never reported as "available")
        """
        try:
            tenant_ids = await self.tenants.find_ids_by_domain(domain)
        except SQLAlchemyError as exc:
            logger.error(f"Availability check for '{domain}' failed: {exc}")
            return Return.err(StorageError())

        taken = [tid for tid in tenant_ids if tid != ignore_tenant_id]
        return Return.ok(not taken)

    async def verify(self, domain: str) -> bool:
        """Run the reachability probe; network failures yield False"""
        if self.probe is None:
            raise RuntimeError("No reachability probe configured")
        reachable = await self.probe.is_reachable(domain)
        if not reachable:
            logger.info(f"Domain '{domain}' did not answer the reachability probe")
        return reachable
