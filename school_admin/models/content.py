from sqlalchemy import Column, String, Boolean, Text, ForeignKey, Uuid
import enum

from .base import Base, enum_column


class ContentType(enum.Enum):
    TEXT = "text"
    HTML = "html"
    JSON = "json"


class Content(Base):
    """Editable site copy addressed by a stable key (e.g. 'home-hero')"""
    __tablename__ = "contents"

    key = Column(String(100), nullable=False, unique=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    type = enum_column(ContentType, default=ContentType.TEXT, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    updated_by = Column(Uuid, ForeignKey("admins.id", ondelete="SET NULL"))
