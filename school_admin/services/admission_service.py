# school_admin/services/admission_service.py
"""Admission workflow: public submission, admin approval into a Student, rejection."""
from typing import Any, Dict, Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from .base_service import BaseService
from ..core.exceptions import ConflictError
from ..gateways import email_templates
from ..models.admin import Admin
from ..models.admission import Admission, AdmissionStatus
from ..models.base import utcnow
from ..models.notification import NotificationPriority, NotificationType, RelatedModel
from ..models.student import ClassName, Student
from ..schemas.admission_schemas import AdmissionCreate
from ..utils import identifiers
from ..utils.uploads import IncomingFile, store_file

logger = logging.getLogger(__name__)

PHOTO_FOLDER = "dmps/students"


class AdmissionService(BaseService[Admission]):
    resource_name = "Admission"

    def __init__(self, db: AsyncSession, storage=None, side_effects=None):
        super().__init__(Admission, db)
        self.storage = storage
        self.side_effects = side_effects

    async def submit(self, application: AdmissionCreate, photo: Optional[IncomingFile] = None) -> Admission:
        """Persist a pending application, then notify admins and email the family"""
        photo_url = ""
        if photo is not None:
            stored = await store_file(self.storage, photo, PHOTO_FOLDER, "Error uploading photo")
            photo_url = stored.url

        values = application.model_dump(exclude_none=True)
        values["address"] = application.address.model_dump()
        values["photo"] = photo_url
        values["status"] = AdmissionStatus.PENDING
        values["application_number"] = await self.generate_unique(
            Admission.application_number, identifiers.application_number
        )

        admission = await self.create(values)
        logger.info(f"Admission {admission.application_number} submitted for class {admission.class_applied.value}")

        if self.side_effects is not None:
            self.side_effects.notify(
                type=NotificationType.ADMISSION,
                title="New Admission Application",
                message=f"{admission.first_name} {admission.last_name} applied for Class {admission.class_applied.value}",
                link="/admin/admissions",
                related_id=admission.id,
                related_model=RelatedModel.ADMISSION,
                priority=NotificationPriority.HIGH,
            )
            subject, html = email_templates.admission_received(admission)
            self.side_effects.email(application.contact_email, subject, html)
        return admission

    async def list_filtered(
        self,
        status: Optional[AdmissionStatus] = None,
        class_applied: Optional[ClassName] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        stmt = select(Admission)
        if status:
            stmt = stmt.where(Admission.status == status)
        if class_applied:
            stmt = stmt.where(Admission.class_applied == class_applied)
        return await self.get_paginated(stmt, page=page, size=limit, order_by=(Admission.created_at.desc(),))

    async def approve(
        self,
        admission_id: UUID,
        approver: Admin,
        section: Optional[str] = None,
        roll_number: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> Tuple[Student, Admission]:
        """Create the Student and mark the Admission approved in one transaction.

        The Admission's version column makes a concurrent second approval fail
        at commit instead of producing a second Student.
        """
        admission = await self.get_or_404(admission_id)
        if admission.status == AdmissionStatus.APPROVED:
            raise ConflictError("Admission already approved")

        admission_number = await self.generate_unique(Student.admission_number, identifiers.admission_number)
        email = admission.father_email or admission.mother_email
        student = Student(
            admission_number=admission_number,
            first_name=admission.first_name,
            last_name=admission.last_name,
            date_of_birth=admission.date_of_birth,
            gender=admission.gender,
            class_name=admission.class_applied,
            section=section or "A",
            roll_number=roll_number or "",
            photo=admission.photo or "",
            email=email.strip().lower() if email else None,
            phone=admission.father_phone,
            address=dict(admission.address or {}),
            father_name=admission.father_name,
            father_phone=admission.father_phone,
            father_occupation=admission.father_occupation,
            mother_name=admission.mother_name,
            mother_phone=admission.mother_phone,
            mother_occupation=admission.mother_occupation,
            guardian_name=admission.guardian_name,
            guardian_phone=admission.guardian_phone,
            guardian_relation=admission.guardian_relation,
            previous_school=admission.previous_school,
            is_approved=True,
            is_active=True,
            academic_year=admission.academic_year,
        )
        self.db.add(student)

        admission.status = AdmissionStatus.APPROVED
        admission.approved_by = approver.id
        admission.approved_at = utcnow()
        admission.remarks = remarks or ""

        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            logger.warning(f"Concurrent approval of admission {admission_id} lost the race")
            raise ConflictError("Admission already approved")
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Approval of admission {admission_id} failed: {e}")
            raise ConflictError("Could not allocate a unique admission number, please retry")

        await self.db.refresh(student)
        await self.db.refresh(admission)
        logger.info(
            f"Admission {admission.application_number} approved by {approver.email}, "
            f"student {student.admission_number} created"
        )

        if self.side_effects is not None:
            subject, html = email_templates.admission_approved(admission, student)
            self.side_effects.email(email, subject, html)
        return student, admission

    async def reject(self, admission_id: UUID, approver: Admin, remarks: Optional[str] = None) -> Admission:
        admission = await self.get_or_404(admission_id)
        if admission.status == AdmissionStatus.APPROVED:
            raise ConflictError("Admission already approved")

        admission.status = AdmissionStatus.REJECTED
        admission.approved_by = approver.id
        admission.remarks = remarks or ""
        try:
            await self.db.commit()
        except StaleDataError:
            await self.db.rollback()
            raise ConflictError("Admission was modified concurrently, please retry")

        await self.db.refresh(admission)
        logger.info(f"Admission {admission.application_number} rejected by {approver.email}")
        return admission

    async def delete_admission(self, admission_id: UUID) -> Admission:
        admission = await self.hard_delete(admission_id)
        logger.info(f"Admission {admission.application_number} deleted")
        return admission
