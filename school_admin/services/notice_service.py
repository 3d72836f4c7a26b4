# school_admin/services/notice_service.py
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import case, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import ValidationError
from ..models.admin import Admin
from ..models.base import utcnow
from ..models.notice import Notice, NoticeCategory, NoticePriority
from ..schemas.site_schemas import NoticeCreate, NoticeUpdate
from ..utils.uploads import IncomingFile, discard_file, store_file

logger = logging.getLogger(__name__)

ATTACHMENT_FOLDER = "dmps/notices"

_PRIORITY_RANK = case(
    (Notice.priority == NoticePriority.URGENT, 4),
    (Notice.priority == NoticePriority.HIGH, 3),
    (Notice.priority == NoticePriority.MEDIUM, 2),
    (Notice.priority == NoticePriority.LOW, 1),
    else_=0,
)


class NoticeService(BaseService[Notice]):
    resource_name = "Notice"

    def __init__(self, db: AsyncSession, storage=None):
        super().__init__(Notice, db)
        self.storage = storage

    async def list_current(
        self,
        category: Optional[NoticeCategory] = None,
        priority: Optional[NoticePriority] = None,
        is_active: bool = True,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """Notices whose display window covers now; pinned first, then priority, newest"""
        now = utcnow()
        stmt = select(Notice).where(
            Notice.is_active == is_active,
            or_(Notice.start_date.is_(None), Notice.start_date <= now),
            or_(Notice.end_date.is_(None), Notice.end_date >= now),
        )
        if category:
            stmt = stmt.where(Notice.category == category)
        if priority:
            stmt = stmt.where(Notice.priority == priority)
        return await self.get_paginated(
            stmt, page=page, size=limit,
            order_by=(Notice.is_pinned.desc(), _PRIORITY_RANK.desc(), Notice.created_at.desc()),
        )

    async def _upload_attachment(self, attachment: IncomingFile) -> Dict[str, Any]:
        stored = await store_file(self.storage, attachment, ATTACHMENT_FOLDER, "Error uploading attachment")
        return {"url": stored.url, "cloudinaryId": stored.public_id, "fileName": attachment.file_name}

    async def create_notice(self, data: NoticeCreate, author: Admin,
                            attachment: Optional[IncomingFile] = None) -> Notice:
        if not data.title or not data.description:
            raise ValidationError("Title and description are required")

        values = data.model_dump(exclude_none=True)
        values["target_audience"] = [a.value for a in data.target_audience]
        values["start_date"] = data.start_date or utcnow()
        values["created_by"] = author.id
        if attachment is not None:
            values["attachment"] = await self._upload_attachment(attachment)

        notice = await self.create(values)
        logger.info(f"Notice '{notice.title}' created by {author.email}")
        return notice

    async def update_notice(self, notice_id: UUID, data: NoticeUpdate,
                            attachment: Optional[IncomingFile] = None) -> Notice:
        notice = await self.get_or_404(notice_id)
        values = data.model_dump(exclude_unset=True)
        if data.target_audience is not None:
            values["target_audience"] = [a.value for a in data.target_audience]

        if attachment is not None:
            previous = notice.attachment or {}
            await discard_file(self.storage, previous.get("cloudinaryId"))
            values["attachment"] = await self._upload_attachment(attachment)

        return await self.update(notice.id, values)

    async def delete_notice(self, notice_id: UUID) -> Notice:
        notice = await self.get_or_404(notice_id)
        await discard_file(self.storage, (notice.attachment or {}).get("cloudinaryId"))
        return await self.hard_delete(notice.id)
