# school_admin/services/notification_service.py
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..models.base import utcnow
from ..models.notification import Notification, NotificationPriority, NotificationType, RelatedModel

logger = logging.getLogger(__name__)


class NotificationService(BaseService[Notification]):
    resource_name = "Notification"

    def __init__(self, db: AsyncSession):
        super().__init__(Notification, db)

    async def create_notification(
        self,
        type: NotificationType,
        title: str,
        message: str,
        link: Optional[str] = None,
        related_id: Optional[UUID] = None,
        related_model: Optional[RelatedModel] = None,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
    ) -> Notification:
        return await self.create({
            "type": NotificationType(type),
            "title": title,
            "message": message,
            "link": link,
            "related_id": related_id,
            "related_model": RelatedModel(related_model) if related_model else None,
            "priority": NotificationPriority(priority or NotificationPriority.MEDIUM),
        })

    async def raise_notification(self, **fields) -> Optional[Notification]:
        """Best-effort create: never raises, returns None on failure"""
        try:
            return await self.create_notification(**fields)
        except Exception as e:
            logger.error(f"Error creating notification: {e}")
            await self.db.rollback()
            return None

    async def list_filtered(self, is_read: Optional[bool] = None, type: Optional[NotificationType] = None,
                            limit: int = 50) -> Dict[str, Any]:
        stmt = select(Notification)
        if is_read is not None:
            stmt = stmt.where(Notification.is_read == is_read)
        if type is not None:
            stmt = stmt.where(Notification.type == type)
        stmt = stmt.order_by(Notification.created_at.desc()).limit(limit)

        items = (await self.db.execute(stmt)).scalars().all()
        return {"items": items, "unread_count": await self.unread_count()}

    async def unread_count(self) -> int:
        return await self.count(Notification.is_read.is_(False))

    async def mark_read(self, notification_id: UUID) -> Notification:
        notification = await self.get_or_404(notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = utcnow()
            await self.db.commit()
            await self.db.refresh(notification)
        return notification

    async def mark_all_read(self) -> int:
        stmt = (
            update(Notification)
            .where(Notification.is_read.is_(False))
            .values(is_read=True, read_at=utcnow())
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount or 0
