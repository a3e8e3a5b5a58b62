from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from bizhub.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def list_open_by_owner(self, owner_id: UUID) -> List[Tenant]:
        """Get all non-cancelled tenants owned by a user"""
        pass

    @abstractmethod
    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        """Get tenant by subdomain"""
        pass

    @abstractmethod
    async def get_by_verified_custom_domain(self, domain: str) -> Optional[Tenant]:
        """Get tenant whose verified custom domain equals ``domain``"""
        pass

    @abstractmethod
    async def subdomain_exists(self, subdomain: str) -> bool:
        """Whether any tenant uses ``subdomain``"""
        pass

    @abstractmethod
    async def find_ids_by_domain(self, domain: str) -> List[UUID]:
        """IDs of tenants using ``domain`` as subdomain or custom domain"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """
        Create a new tenant

        Raises:
            DuplicateKeyError: subdomain or custom domain already taken
        """
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """
        Update existing tenant

        Raises:
            DuplicateKeyError: custom domain already taken
        """
        pass
