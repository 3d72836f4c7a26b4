# school_admin/services/student_service.py
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import ConflictError
from ..models.student import Student, ClassName
from ..schemas.student_schemas import StudentCreate, StudentUpdate
from ..utils import identifiers

logger = logging.getLogger(__name__)

CLASS_ORDER = [c.value for c in ClassName]


class StudentService(BaseService[Student]):
    resource_name = "Student"

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    async def get_by_admission_number(self, admission_number: str) -> Optional[Student]:
        stmt = select(Student).where(Student.admission_number == admission_number)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_filtered(
        self,
        class_name: Optional[ClassName] = None,
        section: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        stmt = select(Student)
        if class_name:
            stmt = stmt.where(Student.class_name == class_name)
        if section:
            stmt = stmt.where(Student.section == section)
        if is_active is not None:
            stmt = stmt.where(Student.is_active == is_active)
        return await self.get_paginated(
            stmt, page=page, size=limit,
            order_by=(Student.class_name, Student.section, Student.roll_number),
        )

    async def create_student(self, data: StudentCreate) -> Student:
        values = data.model_dump(exclude_none=True)
        if not values.get("admission_number"):
            values["admission_number"] = await self.generate_unique(
                Student.admission_number, identifiers.admission_number
            )
        if values.get("email"):
            values["email"] = values["email"].strip().lower()
        try:
            student = await self.create(values)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("A student with this admission number already exists")
        logger.info(f"Created student {student.admission_number}")
        return student

    async def update_student(self, student_id: UUID, data: StudentUpdate) -> Student:
        values = data.model_dump(exclude_unset=True)
        if values.get("email"):
            values["email"] = values["email"].strip().lower()
        return await self.update(student_id, values)

    async def delete_student(self, student_id: UUID) -> Student:
        student = await self.hard_delete(student_id)
        logger.info(f"Deleted student {student.admission_number}")
        return student

    async def stats_overview(self) -> Dict[str, Any]:
        active = Student.is_active.is_(True)
        total = await self.count(active)

        by_class_rows = (await self.db.execute(
            select(Student.class_name, func.count()).where(active).group_by(Student.class_name)
        )).all()
        by_gender_rows = (await self.db.execute(
            select(Student.gender, func.count()).where(active).group_by(Student.gender)
        )).all()

        by_class = sorted(
            ({"class": class_name.value, "count": count} for class_name, count in by_class_rows),
            key=lambda row: CLASS_ORDER.index(row["class"]),
        )
        by_gender = [{"gender": gender.value, "count": count} for gender, count in by_gender_rows]
        return {"total": total, "byClass": by_class, "byGender": by_gender}
