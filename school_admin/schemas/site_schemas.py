# school_admin/schemas/site_schemas.py
"""Pydantic schemas for public site records: notices, gallery, contact, content."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from .common import CamelModel, RecordOut
from ..models.contact import ContactStatus
from ..models.content import ContentType
from ..models.gallery import GalleryCategory, GalleryType
from ..models.notice import Audience, NoticeCategory, NoticePriority
from ..utils.forms import coerce_list


# Notices

class NoticeCreate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    category: NoticeCategory = NoticeCategory.GENERAL
    priority: NoticePriority = NoticePriority.MEDIUM
    target_audience: List[Audience] = [Audience.ALL]
    classes: List[str] = ["All"]
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = True
    is_pinned: bool = False

    @field_validator("target_audience", mode="before")
    @classmethod
    def parse_audience(cls, v):
        return coerce_list(v) or ["All"]

    @field_validator("classes", mode="before")
    @classmethod
    def parse_classes(cls, v):
        return coerce_list(v) or ["All"]


class NoticeUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[NoticeCategory] = None
    priority: Optional[NoticePriority] = None
    target_audience: Optional[List[Audience]] = None
    classes: Optional[List[str]] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_pinned: Optional[bool] = None

    @field_validator("target_audience", mode="before")
    @classmethod
    def parse_audience(cls, v):
        return None if v is None else (coerce_list(v) or ["All"])

    @field_validator("classes", mode="before")
    @classmethod
    def parse_classes(cls, v):
        return None if v is None else coerce_list(v)


class Attachment(CamelModel):
    url: str
    cloudinary_id: Optional[str] = None
    file_name: Optional[str] = None


class NoticeOut(RecordOut):
    title: str
    description: str
    category: NoticeCategory
    priority: NoticePriority
    target_audience: List[Audience] = []
    classes: List[str] = []
    attachment: Optional[Attachment] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool
    is_pinned: bool
    created_by: Optional[UUID] = None


# Gallery

class GalleryImage(CamelModel):
    url: str
    cloudinary_id: Optional[str] = None
    caption: Optional[str] = None


class GalleryCreate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    category: Optional[GalleryCategory] = None
    type: Optional[GalleryType] = None
    video_url: Optional[str] = None
    date: Optional[datetime] = None
    is_active: bool = True


class GalleryUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[GalleryCategory] = None
    video_url: Optional[str] = None
    date: Optional[datetime] = None
    is_active: Optional[bool] = None


class GalleryOut(RecordOut):
    title: str
    description: Optional[str] = None
    category: GalleryCategory
    images: List[GalleryImage] = []
    video_url: Optional[str] = ""
    thumbnail: Optional[str] = ""
    type: GalleryType
    date: Optional[datetime] = None
    is_active: bool
    created_by: Optional[UUID] = None


# Contact

class ContactCreate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None

    def missing_fields(self) -> bool:
        return not all([self.name, self.email, self.phone, self.subject, self.message])


class ContactReply(CamelModel):
    reply_message: Optional[str] = None


class ContactOut(RecordOut):
    name: str
    email: str
    phone: str
    subject: str
    message: str
    status: ContactStatus
    replied_at: Optional[datetime] = None
    reply_message: Optional[str] = None
    replied_by: Optional[UUID] = None


# Content

class ContentUpsert(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str
    type: ContentType = ContentType.TEXT
    is_active: bool = True


class ContentOut(RecordOut):
    key: str
    title: str
    content: str
    type: ContentType
    is_active: bool
    updated_by: Optional[UUID] = None
