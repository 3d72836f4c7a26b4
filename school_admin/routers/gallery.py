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
from ..models.gallery import GalleryCategory, GalleryType
from ..schemas.common import parse_payload, serialize, serialize_page
from ..schemas.site_schemas import GalleryCreate, GalleryOut, GalleryUpdate
from ..services.gallery_service import GalleryService
from ..utils.forms import read_payload
from ..utils.uploads import collect_uploads, first_upload

router = APIRouter(prefix="/api/gallery", tags=["Gallery"])


@router.get("")
async def list_galleries(
    category: Optional[GalleryCategory] = Query(None),
    type: Optional[GalleryType] = Query(None),
    is_active: bool = Query(True, alias="isActive"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    result = await GalleryService(db).list_filtered(
        category=category, type=type, is_active=is_active, page=page, limit=limit
    )
    return serialize_page(GalleryOut, "galleries", result)


@router.get("/{gallery_id}")
async def get_gallery(gallery_id: UUID, db: AsyncSession = Depends(get_db)):
    gallery = await GalleryService(db).get_or_404(gallery_id)
    return {"success": True, "gallery": serialize(GalleryOut, gallery)}


@router.post("")
async def create_gallery(
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    """Multipart with `images` (photo galleries) or `thumbnail` (video galleries)"""
    fields, files = await read_payload(request)
    data = parse_payload(GalleryCreate, fields)
    images = await collect_uploads(files, "images", settings.upload_max_bytes)
    thumbnail = await first_upload(files, "thumbnail", settings.upload_max_bytes)

    gallery = await GalleryService(db, storage=storage).create_gallery(data, admin, images=images, thumbnail=thumbnail)
    return JSONResponse(status_code=201, content={"success": True, "gallery": serialize(GalleryOut, gallery)})


@router.put("/{gallery_id}")
async def update_gallery(
    gallery_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    fields, files = await read_payload(request)
    data = parse_payload(GalleryUpdate, fields)
    images = await collect_uploads(files, "images", settings.upload_max_bytes)

    gallery = await GalleryService(db, storage=storage).update_gallery(gallery_id, data, images=images)
    return {"success": True, "gallery": serialize(GalleryOut, gallery)}


@router.delete("/{gallery_id}")
async def delete_gallery(
    gallery_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_storage),
):
    await GalleryService(db, storage=storage).delete_gallery(gallery_id)
    return {"success": True, "message": "Gallery deleted"}
