from typing import List

from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.libs.result import Result, Return

from .dtos import SegmentInfo


class ListSegmentsUseCase:
    """Active business segments offered on onboarding, by name"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[SegmentInfo]]:
        async with self.uow:
            segments = await self.uow.segments.list_active()
            return Return.ok(
                [
                    SegmentInfo(
                        id=str(segment.id),
                        name=segment.name,
                        slug=segment.slug,
                        description=segment.description,
                    )
                    for segment in segments
                ]
            )
