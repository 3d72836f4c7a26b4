from sqlalchemy import Column, String, DateTime, Boolean, JSON, Text, ForeignKey, Uuid
import enum

from .base import Base, enum_column, utcnow


class GalleryCategory(enum.Enum):
    EVENTS = "Events"
    SPORTS = "Sports"
    CULTURAL = "Cultural"
    ACADEMIC = "Academic"
    INFRASTRUCTURE = "Infrastructure"
    ANNUAL_DAY = "Annual Day"
    OTHER = "Other"


class GalleryType(enum.Enum):
    PHOTO = "photo"
    VIDEO = "video"


class Gallery(Base):
    __tablename__ = "galleries"

    title = Column(String(200), nullable=False)
    description = Column(Text)
    category = enum_column(GalleryCategory, nullable=False, index=True)
    images = Column(JSON, default=list)  # [{url, cloudinaryId, caption}]
    video_url = Column(String(500), default="")
    thumbnail = Column(String(500), default="")
    type = enum_column(GalleryType, default=GalleryType.PHOTO, nullable=False)
    date = Column(DateTime(timezone=True), default=utcnow, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Uuid, ForeignKey("admins.id", ondelete="SET NULL"))
