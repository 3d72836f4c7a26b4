from sqlalchemy import Column, String, DateTime, Boolean, JSON, Text, ForeignKey, Uuid, Index
import enum

from .base import Base, enum_column, utcnow


class NoticeCategory(enum.Enum):
    GENERAL = "General"
    EXAM = "Exam"
    HOLIDAY = "Holiday"
    EVENT = "Event"
    ADMISSION = "Admission"
    FEE = "Fee"
    URGENT = "Urgent"


class NoticePriority(enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class Audience(enum.Enum):
    ALL = "All"
    STUDENTS = "Students"
    PARENTS = "Parents"
    TEACHERS = "Teachers"
    STAFF = "Staff"


class Notice(Base):
    __tablename__ = "notices"

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = enum_column(NoticeCategory, default=NoticeCategory.GENERAL, nullable=False, index=True)
    priority = enum_column(NoticePriority, default=NoticePriority.MEDIUM, nullable=False)
    target_audience = Column(JSON, default=lambda: ["All"])
    classes = Column(JSON, default=list)

    # {url, cloudinaryId, fileName}
    attachment = Column(JSON)

    start_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    end_date = Column(DateTime(timezone=True))
    is_active = Column(Boolean, default=True, nullable=False)
    is_pinned = Column(Boolean, default=False, nullable=False)
    created_by = Column(Uuid, ForeignKey("admins.id", ondelete="SET NULL"))

    __table_args__ = (
        Index("ix_notices_active_pinned_created", "is_active", "is_pinned", "created_at"),
    )
