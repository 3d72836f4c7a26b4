from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Uuid
import enum

from .base import Base, enum_column


class ContactStatus(enum.Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    RESOLVED = "resolved"


class Contact(Base):
    __tablename__ = "contacts"

    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = enum_column(ContactStatus, default=ContactStatus.NEW, nullable=False, index=True)
    replied_at = Column(DateTime(timezone=True))
    reply_message = Column(Text)
    replied_by = Column(Uuid, ForeignKey("admins.id", ondelete="SET NULL"))
