from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_admin, require_admin
from ..core.config import settings
from ..core.database import get_db
from ..core.dependencies import get_side_effects, get_storage
from ..models.admin import Admin
from ..models.admission import AdmissionStatus
from ..models.student import ClassName
from ..schemas.admission_schemas import (
    AdmissionCreate,
    AdmissionOut,
    ApproveAdmissionRequest,
    RejectAdmissionRequest,
)
from ..schemas.common import parse_payload, serialize, serialize_page
from ..schemas.student_schemas import StudentOut
from ..services.admission_service import AdmissionService
from ..utils.forms import read_payload
from ..utils.uploads import first_upload

router = APIRouter(prefix="/api/admissions", tags=["Admissions"])


@router.post("")
async def submit_admission(
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
    side_effects=Depends(get_side_effects),
):
    """Public application form; JSON or multipart with an optional `photo`"""
    fields, files = await read_payload(request)
    application = AdmissionCreate.from_payload(fields)
    photo = await first_upload(files, "photo", settings.upload_max_bytes)

    service = AdmissionService(db, storage=storage, side_effects=side_effects)
    admission = await service.submit(application, photo)
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "admission": serialize(AdmissionOut, admission),
        },
    )


@router.get("")
async def list_admissions(
    status: Optional[AdmissionStatus] = Query(None),
    class_applied: Optional[ClassName] = Query(None, alias="classApplied"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await AdmissionService(db).list_filtered(status=status, class_applied=class_applied, page=page, limit=limit)
    return serialize_page(AdmissionOut, "admissions", result)


@router.get("/{admission_id}")
async def get_admission(
    admission_id: UUID,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    admission = await AdmissionService(db).get_or_404(admission_id)
    return {"success": True, "admission": serialize(AdmissionOut, admission)}


@router.put("/{admission_id}/approve")
async def approve_admission(
    admission_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    side_effects=Depends(get_side_effects),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ApproveAdmissionRequest, fields)

    service = AdmissionService(db, side_effects=side_effects)
    student, admission = await service.approve(
        admission_id, admin, section=data.section, roll_number=data.roll_number, remarks=data.remarks
    )
    return {
        "success": True,
        "message": "Admission approved successfully",
        "student": serialize(StudentOut, student),
        "admission": serialize(AdmissionOut, admission),
    }


@router.put("/{admission_id}/reject")
async def reject_admission(
    admission_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(RejectAdmissionRequest, fields)
    admission = await AdmissionService(db).reject(admission_id, admin, remarks=data.remarks)
    return {"success": True, "message": "Admission rejected", "admission": serialize(AdmissionOut, admission)}


@router.delete("/{admission_id}")
async def delete_admission(
    admission_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await AdmissionService(db).delete_admission(admission_id)
    return {"success": True, "message": "Admission deleted"}
