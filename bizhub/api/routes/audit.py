"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from bizhub.api.error import raise_for_error
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.audit import GetAuditEventsUseCase
from bizhub.depends import get_current_principal, get_unit_of_work
from bizhub.domain.entities import Principal

router = APIRouter(tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    user_email: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /tenants/{tenant_id}/audit-events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/tenants/{tenant_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    tenant_id: UUID,
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Tenant Audit Events

    Newest first, cursor-paginated.

    Raises:
        - 401 Unauthorized: NOT_AUTHENTICATED
        - 403 Forbidden: INSUFFICIENT_ROLE (needs view_audit_log)
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(principal, tenant_id, limit=limit, cursor=cursor)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
