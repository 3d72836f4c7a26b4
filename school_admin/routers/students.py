from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_admin, require_admin
from ..core.database import get_db
from ..models.admin import Admin
from ..models.student import ClassName
from ..schemas.common import parse_payload, serialize, serialize_page
from ..schemas.student_schemas import StudentCreate, StudentOut, StudentUpdate
from ..services.student_service import StudentService
from ..utils.forms import read_payload

router = APIRouter(prefix="/api/students", tags=["Students"])


@router.get("")
async def list_students(
    class_name: Optional[ClassName] = Query(None, alias="class"),
    section: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await StudentService(db).list_filtered(
        class_name=class_name, section=section, is_active=is_active, page=page, limit=limit
    )
    return serialize_page(StudentOut, "students", result)


# Registered before /{student_id} so the literal path wins
@router.get("/stats/overview")
async def student_stats(
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    stats = await StudentService(db).stats_overview()
    return {"success": True, "stats": stats}


@router.get("/{student_id}")
async def get_student(
    student_id: UUID,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    student = await StudentService(db).get_or_404(student_id)
    return {"success": True, "student": serialize(StudentOut, student)}


@router.post("")
async def create_student(
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(StudentCreate, fields)
    student = await StudentService(db).create_student(data)
    return JSONResponse(status_code=201, content={"success": True, "student": serialize(StudentOut, student)})


@router.put("/{student_id}")
async def update_student(
    student_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(StudentUpdate, fields)
    student = await StudentService(db).update_student(student_id, data)
    return {"success": True, "student": serialize(StudentOut, student)}


@router.delete("/{student_id}")
async def delete_student(
    student_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await StudentService(db).delete_student(student_id)
    return {"success": True, "message": "Student deleted"}
