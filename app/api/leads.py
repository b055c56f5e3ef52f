import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, UploadFile, File
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import ValidationError
from app.models.enums import LeadStatus
from app.models.user import User
from app.schemas.lead import (
    LeadCreate,
    LeadUpdate,
    LeadResponse,
    LeadListResponse,
    LeadDetail,
    LeadAssignRequest,
    BulkAssignRequest,
    BulkAssignResponse,
)
from app.schemas.lead_import import ImportResponse, ImportPreviewResponse
from app.services.lead_service import LeadService
from app.services.lead_import_service import LeadImportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["Leads"])


async def _read_upload(file: Optional[UploadFile]) -> str:
    if file is None:
        raise ValidationError("No file provided")
    raw = await file.read()
    return raw.decode("utf-8-sig", errors="replace")


# =========================================================
# 1. LIST / CREATE
# =========================================================

@router.get("", response_model=LeadListResponse)
def list_leads(
    status: Optional[LeadStatus] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeadService(db, current_user).list_leads(page=page, limit=limit, status=status, search=search)


@router.post("", response_model=LeadResponse, status_code=201)
def create_lead(
    payload: LeadCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeadService(db, current_user).create_lead(payload)


# =========================================================
# 2. BULK OPERATIONS (declared before /{lead_id})
# =========================================================

@router.post("/bulk-assign", response_model=BulkAssignResponse)
def bulk_assign(
    payload: BulkAssignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeadService(db, current_user).bulk_reassign(payload.lead_ids, payload.assigned_to_id)


@router.post("/import", response_model=ImportResponse)
async def import_leads(
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content = await _read_upload(file)
    return LeadImportService(db, current_user).import_csv(content)


@router.post("/import/preview", response_model=ImportPreviewResponse)
async def preview_import(
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content = await _read_upload(file)
    return LeadImportService(db, current_user).preview(content)


# =========================================================
# 3. SINGLE LEAD
# =========================================================

@router.get("/{lead_id}", response_model=LeadDetail)
def get_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeadService(db, current_user).get_lead_detail(lead_id)


@router.patch("/{lead_id}", response_model=LeadResponse)
def update_lead(
    lead_id: str,
    payload: LeadUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeadService(db, current_user).update_lead(lead_id, payload)


@router.delete("/{lead_id}")
def delete_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    LeadService(db, current_user).delete_lead(lead_id)
    return {"success": True}


@router.post("/{lead_id}/assign", response_model=LeadResponse)
def assign_lead(
    lead_id: str,
    payload: LeadAssignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeadService(db, current_user).reassign(lead_id, payload.assigned_to_id)
