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
from ..models.notice import NoticeCategory, NoticePriority
from ..schemas.common import parse_payload, serialize, serialize_page
from ..schemas.site_schemas import NoticeCreate, NoticeOut, NoticeUpdate
from ..services.notice_service import NoticeService
from ..utils.forms import read_payload
from ..utils.uploads import first_upload

router = APIRouter(prefix="/api/notices", tags=["Notices"])


@router.get("")
async def list_notices(
    category: Optional[NoticeCategory] = Query(None),
    priority: Optional[NoticePriority] = Query(None),
    is_active: bool = Query(True, alias="isActive"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    result = await NoticeService(db).list_current(
        category=category, priority=priority, is_active=is_active, page=page, limit=limit
    )
    return serialize_page(NoticeOut, "notices", result)


@router.get("/{notice_id}")
async def get_notice(notice_id: UUID, db: AsyncSession = Depends(get_db)):
    notice = await NoticeService(db).get_or_404(notice_id)
    return {"success": True, "notice": serialize(NoticeOut, notice)}


@router.post("")
async def create_notice(
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    fields, files = await read_payload(request)
    data = parse_payload(NoticeCreate, fields)
    attachment = await first_upload(files, "attachment", settings.upload_max_bytes)

    notice = await NoticeService(db, storage=storage).create_notice(data, admin, attachment)
    return JSONResponse(status_code=201, content={"success": True, "notice": serialize(NoticeOut, notice)})


@router.put("/{notice_id}")
async def update_notice(
    notice_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    fields, files = await read_payload(request)
    data = parse_payload(NoticeUpdate, fields)
    attachment = await first_upload(files, "attachment", settings.upload_max_bytes)

    notice = await NoticeService(db, storage=storage).update_notice(notice_id, data, attachment)
    return {"success": True, "notice": serialize(NoticeOut, notice)}


@router.delete("/{notice_id}")
async def delete_notice(
    notice_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    await NoticeService(db, storage=storage).delete_notice(notice_id)
    return {"success": True, "message": "Notice deleted"}
