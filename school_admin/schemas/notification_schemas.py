# school_admin/schemas/notification_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from .common import RecordOut
from ..models.notification import NotificationPriority, NotificationType, RelatedModel


class NotificationOut(RecordOut):
    type: NotificationType
    title: str
    message: str
    link: Optional[str] = None
    is_read: bool
    read_at: Optional[datetime] = None
    related_id: Optional[UUID] = None
    related_model: Optional[RelatedModel] = None
    priority: NotificationPriority
