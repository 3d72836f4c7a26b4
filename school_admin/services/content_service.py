# school_admin/services/content_service.py
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import NotFoundError
from ..models.admin import Admin
from ..models.content import Content
from ..schemas.site_schemas import ContentUpsert

logger = logging.getLogger(__name__)


class ContentService(BaseService[Content]):
    resource_name = "Content"

    def __init__(self, db: AsyncSession):
        super().__init__(Content, db)

    async def get_by_key(self, key: str, active_only: bool = True) -> Content:
        stmt = select(Content).where(Content.key == key)
        if active_only:
            stmt = stmt.where(Content.is_active.is_(True))
        content = (await self.db.execute(stmt)).scalar_one_or_none()
        if content is None:
            raise NotFoundError(self.resource_name)
        return content

    async def upsert(self, key: str, data: ContentUpsert, admin: Admin) -> Content:
        values = data.model_dump()
        values["updated_by"] = admin.id

        stmt = select(Content).where(Content.key == key)
        content = (await self.db.execute(stmt)).scalar_one_or_none()
        if content is None:
            content = await self.create({"key": key, **values})
            logger.info(f"Content '{key}' created by {admin.email}")
            return content
        return await self.update(content.id, values)
