from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.app.repositories.segment_repository import ISegmentRepository
from bizhub.domain.entities import CatalogStatus, Segment


class SegmentRepository(ISegmentRepository):
    """Segment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, segment_id: UUID) -> Optional[Segment]:
        return await self.session.get(Segment, segment_id)

    async def list_active(self) -> List[Segment]:
        stmt = (
            select(Segment)
            .where(Segment.status == CatalogStatus.active)
            .order_by(Segment.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
