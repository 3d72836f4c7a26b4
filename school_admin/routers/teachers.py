from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_admin
from ..core.config import settings
from ..core.database import get_db
from ..core.dependencies import get_storage
from ..models.admin import Admin
from ..schemas.common import parse_payload, serialize
from ..schemas.teacher_schemas import TeacherCreate, TeacherOut, TeacherUpdate
from ..services.teacher_service import TeacherService
from ..utils.forms import read_payload
from ..utils.uploads import first_upload

router = APIRouter(prefix="/api/teachers", tags=["Teachers"])


@router.get("")
async def list_teachers(
    subject: Optional[str] = Query(None),
    is_active: bool = Query(True, alias="isActive"),
    db: AsyncSession = Depends(get_db),
):
    teachers = await TeacherService(db).list_filtered(subject=subject, is_active=is_active)
    return {
        "success": True,
        "count": len(teachers),
        "teachers": [serialize(TeacherOut, teacher) for teacher in teachers],
    }


@router.get("/{teacher_id}")
async def get_teacher(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    teacher = await TeacherService(db).get_or_404(teacher_id)
    return {"success": True, "teacher": serialize(TeacherOut, teacher)}


@router.post("")
async def create_teacher(
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    fields, files = await read_payload(request)
    data = parse_payload(TeacherCreate, fields)
    photo = await first_upload(files, "photo", settings.upload_max_bytes)

    teacher = await TeacherService(db, storage=storage).create_teacher(data, photo)
    return JSONResponse(status_code=201, content={"success": True, "teacher": serialize(TeacherOut, teacher)})


@router.put("/{teacher_id}")
async def update_teacher(
    teacher_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    fields, files = await read_payload(request)
    data = parse_payload(TeacherUpdate, fields)
    photo = await first_upload(files, "photo", settings.upload_max_bytes)

    teacher = await TeacherService(db, storage=storage).update_teacher(teacher_id, data, photo)
    return {"success": True, "teacher": serialize(TeacherOut, teacher)}


@router.delete("/{teacher_id}")
async def delete_teacher(
    teacher_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await TeacherService(db).hard_delete(teacher_id)
    return {"success": True, "message": "Teacher deleted"}
