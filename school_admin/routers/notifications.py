from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_admin
from ..core.database import get_db
from ..models.admin import Admin
from ..models.notification import NotificationType
from ..schemas.common import serialize
from ..schemas.notification_schemas import NotificationOut
from ..services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("")
async def list_notifications(
    is_read: Optional[bool] = Query(None, alias="isRead"),
    type: Optional[NotificationType] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await NotificationService(db).list_filtered(is_read=is_read, type=type, limit=limit)
    return {
        "success": True,
        "count": len(result["items"]),
        "unreadCount": result["unread_count"],
        "notifications": [serialize(NotificationOut, n) for n in result["items"]],
    }


@router.get("/unread-count")
async def unread_count(
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"success": True, "count": await NotificationService(db).unread_count()}


@router.put("/read-all")
async def mark_all_read(
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    updated = await NotificationService(db).mark_all_read()
    return {"success": True, "message": "All notifications marked as read", "updated": updated}


@router.put("/{notification_id}/read")
async def mark_read(
    notification_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    notification = await NotificationService(db).mark_read(notification_id)
    return {"success": True, "notification": serialize(NotificationOut, notification)}


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await NotificationService(db).hard_delete(notification_id)
    return {"success": True, "message": "Notification deleted"}
