# school_admin/services/teacher_service.py
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import ConflictError
from ..models.base import utcnow
from ..models.teacher import Teacher
from ..schemas.teacher_schemas import TeacherCreate, TeacherUpdate
from ..utils import identifiers
from ..utils.uploads import IncomingFile, store_file

logger = logging.getLogger(__name__)

PHOTO_FOLDER = "dmps/teachers"


class TeacherService(BaseService[Teacher]):
    resource_name = "Teacher"

    def __init__(self, db: AsyncSession, storage=None):
        super().__init__(Teacher, db)
        self.storage = storage

    async def list_filtered(self, subject: Optional[str] = None, is_active: bool = True) -> List[Teacher]:
        stmt = select(Teacher).where(Teacher.is_active == is_active)
        if subject:
            stmt = stmt.where(Teacher.subject == subject)
        stmt = stmt.order_by(Teacher.designation, Teacher.first_name)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_teacher(self, data: TeacherCreate, photo: Optional[IncomingFile] = None) -> Teacher:
        photo_url = ""
        if photo is not None:
            stored = await store_file(self.storage, photo, PHOTO_FOLDER, "Error uploading photo")
            photo_url = stored.url

        values = data.model_dump(exclude_none=True)
        values["classes"] = [c.value for c in data.classes]
        values["email"] = values["email"].strip().lower()
        values["photo"] = photo_url
        values.setdefault("joining_date", utcnow())
        if not values.get("employee_id"):
            values["employee_id"] = await self.generate_unique(Teacher.employee_id, identifiers.employee_id)

        try:
            teacher = await self.create(values)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("A teacher with this email or employee ID already exists")
        logger.info(f"Created teacher {teacher.employee_id} ({teacher.subject})")
        return teacher

    async def update_teacher(self, teacher_id: UUID, data: TeacherUpdate, photo: Optional[IncomingFile] = None) -> Teacher:
        values = data.model_dump(exclude_unset=True)
        if data.classes is not None:
            values["classes"] = [c.value for c in data.classes]
        if photo is not None:
            stored = await store_file(self.storage, photo, PHOTO_FOLDER, "Error uploading photo")
            values["photo"] = stored.url
        if values.get("email"):
            values["email"] = values["email"].strip().lower()
        try:
            return await self.update(teacher_id, values)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("A teacher with this email already exists")
