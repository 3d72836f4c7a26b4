# school_admin/services/dashboard_service.py
from typing import Any, Dict
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.admission import Admission, AdmissionStatus
from ..models.contact import Contact, ContactStatus
from ..models.fee import Fee
from ..models.notice import Notice
from ..models.student import Student
from ..models.teacher import Teacher
from .student_service import CLASS_ORDER

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-only aggregates for the admin landing page"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *criteria) -> int:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return (await self.db.execute(stmt)).scalar() or 0

    async def overview(self) -> Dict[str, Any]:
        fee_rows = (await self.db.execute(
            select(
                Fee.status,
                func.count(),
                func.coalesce(func.sum(Fee.total_amount), 0),
                func.coalesce(func.sum(Fee.paid_amount), 0),
                func.coalesce(func.sum(Fee.pending_amount), 0),
            ).group_by(Fee.status)
        )).all()
        fee_stats = [
            {
                "status": status.value,
                "count": count,
                "totalAmount": float(total),
                "paidAmount": float(paid),
                "pendingAmount": float(pending),
            }
            for status, count, total, paid, pending in fee_rows
        ]

        class_rows = (await self.db.execute(
            select(Student.class_name, func.count())
            .where(Student.is_active.is_(True))
            .group_by(Student.class_name)
        )).all()
        students_by_class = sorted(
            ({"class": class_name.value, "count": count} for class_name, count in class_rows),
            key=lambda row: CLASS_ORDER.index(row["class"]),
        )

        recent_notices = (await self.db.execute(
            select(Notice).where(Notice.is_active.is_(True)).order_by(Notice.created_at.desc()).limit(5)
        )).scalars().all()
        recent_admissions = (await self.db.execute(
            select(Admission).order_by(Admission.created_at.desc()).limit(5)
        )).scalars().all()

        return {
            "total_students": await self._count(Student, Student.is_active.is_(True)),
            "pending_admissions": await self._count(Admission, Admission.status == AdmissionStatus.PENDING),
            "total_teachers": await self._count(Teacher, Teacher.is_active.is_(True)),
            "new_contacts": await self._count(Contact, Contact.status == ContactStatus.NEW),
            "fee_stats": fee_stats,
            "students_by_class": students_by_class,
            "recent_notices": recent_notices,
            "recent_admissions": recent_admissions,
        }
