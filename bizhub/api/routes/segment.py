from typing import List

from fastapi import APIRouter, Depends, status

from bizhub.api.error import raise_for_error
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.tenants import ListSegmentsUseCase, SegmentInfo
from bizhub.depends import get_unit_of_work

router = APIRouter(prefix="/segments", tags=["Segments"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SegmentInfo])
async def list_segments(uow: UnitOfWork = Depends(get_unit_of_work)):
    """Active business segments offered on onboarding"""
    result = await ListSegmentsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value
