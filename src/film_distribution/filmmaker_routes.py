"""
Filmmaker outreach API routes: CSV import, listing and invitations
Errors use the { error: { message } } envelope
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from .dependencies import get_filmmaker_service
from .exceptions import error_detail
from .services.filmmaker_service import FilmmakerService, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["filmmakers"])


class ImportRequest(BaseModel):
    csv_content: Optional[str] = Field(None, alias="csvContent")

    model_config = {"populate_by_name": True}


class InviteRequest(BaseModel):
    filmmaker_ids: List[int] = Field(default_factory=list, alias="filmmakerIds")
    sent_by: int = Field(..., alias="sentBy")

    model_config = {"populate_by_name": True}


class BulkInviteRequest(InviteRequest):
    subject: Optional[str] = None
    message: Optional[str] = None


def _require_ids(filmmaker_ids: List[int]) -> None:
    if not filmmaker_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail("At least one filmmaker must be selected")
        )


@router.post("/email/bulk-invite")
async def bulk_invite(
    request: BulkInviteRequest,
    service: FilmmakerService = Depends(get_filmmaker_service)
):
    """Send a custom invitation email to the selected filmmakers"""
    _require_ids(request.filmmaker_ids)
    result = service.send_invitations(
        request.filmmaker_ids,
        sent_by=request.sent_by,
        subject=request.subject,
        message=request.message,
    )
    return {"success": True, "count": len(request.filmmaker_ids), **result}


@router.post("/filmmakers/import")
async def import_filmmakers(
    request: ImportRequest,
    service: FilmmakerService = Depends(get_filmmaker_service)
):
    if not request.csv_content or not request.csv_content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail("CSV content is required"))

    result = service.import_csv(request.csv_content)
    logger.info(f"Filmmaker import: {result['imported']} imported, {result['failed']} failed")
    return {"success": True, **result}


@router.get("/filmmakers")
async def list_filmmakers(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    search: Optional[str] = None,
    service: FilmmakerService = Depends(get_filmmaker_service)
):
    return service.list_filmmakers(page=page, limit=limit, search=search)


@router.post("/filmmakers/invite")
async def invite_filmmakers(
    request: InviteRequest,
    service: FilmmakerService = Depends(get_filmmaker_service)
):
    """Send the standard invitation email to the selected filmmakers"""
    _require_ids(request.filmmaker_ids)
    result = service.send_invitations(request.filmmaker_ids, sent_by=request.sent_by)
    return {"success": True, **result}
