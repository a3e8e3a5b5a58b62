from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from bizhub.domain.entities import Subscription


class ISubscriptionRepository(ABC):
    """Subscription repository interface - read-only, billing owns the rows"""

    @abstractmethod
    async def get_by_id(self, subscription_id: UUID) -> Optional[Subscription]:
        """Get subscription (with its plan) by ID"""
        pass

    @abstractmethod
    async def get_current_for_user(self, user_id: UUID) -> Optional[Subscription]:
        """Get the most recent active or trial subscription of a user"""
        pass
