# school_admin/services/gallery_service.py
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID
import logging
import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import UpstreamGatewayError, ValidationError
from ..models.admin import Admin
from ..models.base import utcnow
from ..models.gallery import Gallery, GalleryCategory, GalleryType
from ..schemas.site_schemas import GalleryCreate, GalleryUpdate
from ..utils.uploads import IncomingFile, discard_file, store_file

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "dmps/gallery"
THUMBNAIL_FOLDER = "dmps/gallery/thumbnails"

_YOUTUBE_ID = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)")
_VIMEO_ID = re.compile(r"vimeo\.com/(\d+)")


def video_thumbnail(video_url: str) -> str:
    """Preview image for a YouTube or Vimeo link, empty for anything else"""
    match = _YOUTUBE_ID.search(video_url or "")
    if match:
        return f"https://img.youtube.com/vi/{match.group(1)}/maxresdefault.jpg"
    match = _VIMEO_ID.search(video_url or "")
    if match:
        return f"https://vumbnail.com/{match.group(1)}.jpg"
    return ""


class GalleryService(BaseService[Gallery]):
    resource_name = "Gallery"

    def __init__(self, db: AsyncSession, storage=None):
        super().__init__(Gallery, db)
        self.storage = storage

    async def list_filtered(
        self,
        category: Optional[GalleryCategory] = None,
        type: Optional[GalleryType] = None,
        is_active: bool = True,
        page: int = 1,
        limit: int = 12,
    ) -> Dict[str, Any]:
        stmt = select(Gallery).where(Gallery.is_active == is_active)
        if category:
            stmt = stmt.where(Gallery.category == category)
        if type:
            stmt = stmt.where(Gallery.type == type)
        return await self.get_paginated(
            stmt, page=page, size=limit, order_by=(Gallery.date.desc(), Gallery.created_at.desc())
        )

    async def _upload_images(self, images: Sequence[IncomingFile]) -> List[Dict[str, Any]]:
        uploaded = []
        for image in images:
            stored = await store_file(self.storage, image, IMAGE_FOLDER, "Error uploading images")
            uploaded.append({"url": stored.url, "cloudinaryId": stored.public_id, "caption": ""})
        return uploaded

    async def create_gallery(
        self,
        data: GalleryCreate,
        author: Admin,
        images: Sequence[IncomingFile] = (),
        thumbnail: Optional[IncomingFile] = None,
    ) -> Gallery:
        if not data.title or not data.category:
            raise ValidationError("Title and category are required")

        gallery_type = data.type or (GalleryType.VIDEO if data.video_url else GalleryType.PHOTO)
        values = data.model_dump(exclude_none=True)
        values.update(type=gallery_type, created_by=author.id, date=data.date or utcnow())

        if gallery_type == GalleryType.VIDEO:
            if not data.video_url:
                raise ValidationError("Video URL is required for video galleries")
            values["images"] = []
            values["thumbnail"] = await self._video_thumbnail(data.video_url, thumbnail)
        else:
            if not images:
                raise ValidationError("At least one image is required for photo galleries")
            values["images"] = await self._upload_images(images)
            values["thumbnail"] = values["images"][0]["url"]

        gallery = await self.create(values)
        logger.info(f"Gallery '{gallery.title}' ({gallery_type.value}) created by {author.email}")
        return gallery

    async def _video_thumbnail(self, video_url: str, upload: Optional[IncomingFile]) -> str:
        if upload is not None:
            try:
                stored = await store_file(self.storage, upload, THUMBNAIL_FOLDER)
                return stored.url
            except UpstreamGatewayError as e:
                logger.warning(f"Thumbnail upload failed, falling back to video preview: {e.message}")
        return video_thumbnail(video_url)

    async def update_gallery(self, gallery_id: UUID, data: GalleryUpdate,
                             images: Sequence[IncomingFile] = ()) -> Gallery:
        """Metadata edits; new images are appended to the existing set"""
        gallery = await self.get_or_404(gallery_id)
        values = data.model_dump(exclude_unset=True)

        if images:
            added = await self._upload_images(images)
            values["images"] = list(gallery.images or []) + added
            if not gallery.thumbnail:
                values["thumbnail"] = added[0]["url"]
        if gallery.type == GalleryType.VIDEO and data.video_url:
            values["thumbnail"] = video_thumbnail(data.video_url) or gallery.thumbnail

        return await self.update(gallery.id, values)

    async def delete_gallery(self, gallery_id: UUID) -> Gallery:
        gallery = await self.get_or_404(gallery_id)
        for image in gallery.images or []:
            await discard_file(self.storage, image.get("cloudinaryId"))
        return await self.hard_delete(gallery.id)
