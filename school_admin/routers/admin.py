from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_admin
from ..core.database import get_db
from ..models.admin import Admin
from ..schemas.admission_schemas import AdmissionOut
from ..schemas.common import parse_payload, serialize
from ..schemas.site_schemas import ContentOut, ContentUpsert, NoticeOut
from ..services.content_service import ContentService
from ..services.dashboard_service import DashboardService
from ..utils.forms import read_payload

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/dashboard")
async def dashboard(
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    overview = await DashboardService(db).overview()
    return {
        "success": True,
        "stats": {
            "totalStudents": overview["total_students"],
            "pendingAdmissions": overview["pending_admissions"],
            "totalTeachers": overview["total_teachers"],
            "newContacts": overview["new_contacts"],
            "feeStats": overview["fee_stats"],
            "studentsByClass": overview["students_by_class"],
        },
        "recentNotices": [serialize(NoticeOut, n) for n in overview["recent_notices"]],
        "recentAdmissions": [serialize(AdmissionOut, a) for a in overview["recent_admissions"]],
    }


@router.get("/content/{key}")
async def get_content(key: str, db: AsyncSession = Depends(get_db)):
    """Public: editable site copy by key"""
    content = await ContentService(db).get_by_key(key)
    return {"success": True, "content": serialize(ContentOut, content)}


@router.put("/content/{key}")
async def upsert_content(
    key: str,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ContentUpsert, fields)
    content = await ContentService(db).upsert(key, data, admin)
    return {"success": True, "content": serialize(ContentOut, content)}
