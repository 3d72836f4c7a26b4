from sqlalchemy import Column, String, DateTime, Boolean, Text, Uuid, Index
import enum

from .base import Base, enum_column


class NotificationType(enum.Enum):
    CONTACT = "contact"
    ADMISSION = "admission"
    PAYMENT = "payment"
    SYSTEM = "system"
    OTHER = "other"


class NotificationPriority(enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RelatedModel(enum.Enum):
    CONTACT = "Contact"
    ADMISSION = "Admission"
    FEE = "Fee"


class Notification(Base):
    __tablename__ = "notifications"

    type = enum_column(NotificationType, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String(200))
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime(timezone=True))

    # Loose reference, no FK: the related row may be deleted later
    related_id = Column(Uuid)
    related_model = enum_column(RelatedModel, nullable=True)
    priority = enum_column(NotificationPriority, default=NotificationPriority.MEDIUM, nullable=False)

    __table_args__ = (
        Index("ix_notifications_is_read_created", "is_read", "created_at"),
    )
