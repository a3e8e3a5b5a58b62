"""
Subdomain Allocator

Derives a URL-safe subdomain from a business name and probes storage until an
unused candidate is found: ``acmecorp``, ``acmecorp1``, ``acmecorp2``, ...

The probe is advisory. Two concurrent allocations can pick the same candidate;
the unique index on ``business_tenants.subdomain`` is the real guard and the
tenant creation use case retries when it fires.
"""

import logging
import re
from itertools import count, islice
from typing import Iterable, Iterator

from bizhub.app.repositories.tenant_repository import ITenantRepository
from bizhub.domain.errors import AllocationExhaustedError
from bizhub.libs.result import Result, Return

logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 20
DEFAULT_BASE_SLUG = "empresa"
DEFAULT_MAX_ATTEMPTS = 1000

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


def derive_base_slug(business_name: str) -> str:
    """Lower-case, keep only [a-z0-9], truncate; empty results fall back to the default"""
    slug = _NON_SLUG_CHARS.sub("", (business_name or "").lower())[:SLUG_MAX_LENGTH]
    return slug or DEFAULT_BASE_SLUG


def iter_candidates(base: str) -> Iterator[str]:
    yield base
    for suffix in count(1):
        yield f"{base}{suffix}"


class SubdomainAllocator:
    """Best-effort, side-effect free subdomain allocation"""

    def __init__(
        self, tenants: ITenantRepository, max_attempts: int = DEFAULT_MAX_ATTEMPTS
    ):
        self.tenants = tenants
        self.max_attempts = max_attempts

    async def allocate(
        self, business_name: str, exclude: Iterable[str] = ()
    ) -> Result[str]:
        """
        Allocate an unused subdomain for ``business_name``.

        Args:
            business_name: Display name the slug is derived from
            exclude: Candidates already known to be taken (lost races)

        Returns:
            Result with the subdomain, or AllocationExhaustedError once
            ``max_attempts`` candidates have been tried
        """
        base = derive_base_slug(business_name)
        skipped = set(exclude)

        for candidate in islice(iter_candidates(base), self.max_attempts):
            if candidate in skipped:
                continue
            if not await self.tenants.subdomain_exists(candidate):
                return Return.ok(candidate)

        logger.error(
            f"Subdomain allocation exhausted for base '{base}' "
            f"after {self.max_attempts} attempts"
        )
        return Return.err(AllocationExhaustedError())
