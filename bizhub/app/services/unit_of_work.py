from abc import ABC, abstractmethod

from bizhub.app.repositories.audit_event_repository import IAuditEventRepository
from bizhub.app.repositories.membership_repository import IMembershipRepository
from bizhub.app.repositories.segment_repository import ISegmentRepository
from bizhub.app.repositories.subscription_repository import ISubscriptionRepository
from bizhub.app.repositories.tenant_repository import ITenantRepository
from bizhub.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    segments: ISegmentRepository
    subscriptions: ISubscriptionRepository
    tenants: ITenantRepository
    memberships: IMembershipRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
