from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from bizhub.domain.entities import Segment


class ISegmentRepository(ABC):
    """Segment repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, segment_id: UUID) -> Optional[Segment]:
        """Get segment by ID"""
        pass

    @abstractmethod
    async def list_active(self) -> List[Segment]:
        """Get active segments ordered by name"""
        pass
