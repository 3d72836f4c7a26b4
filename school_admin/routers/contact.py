from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import require_admin
from ..core.database import get_db
from ..core.dependencies import get_side_effects
from ..models.admin import Admin
from ..models.contact import ContactStatus
from ..schemas.common import parse_payload, serialize, serialize_page
from ..schemas.site_schemas import ContactCreate, ContactOut, ContactReply
from ..services.contact_service import ContactService
from ..utils.forms import read_payload

router = APIRouter(prefix="/api/contact", tags=["Contact"])


@router.post("")
async def submit_contact(
    request: Request,
    db: AsyncSession = Depends(get_db),
    side_effects=Depends(get_side_effects),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ContactCreate, fields)
    contact = await ContactService(db, side_effects=side_effects).submit(data)
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "message": "Your message has been submitted successfully",
            "contact": serialize(ContactOut, contact),
        },
    )


@router.get("")
async def list_contacts(
    status: Optional[ContactStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    result = await ContactService(db).list_filtered(status=status, page=page, limit=limit)
    return serialize_page(ContactOut, "contacts", result)


@router.get("/{contact_id}")
async def get_contact(
    contact_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    contact = await ContactService(db).open_message(contact_id)
    return {"success": True, "contact": serialize(ContactOut, contact)}


@router.put("/{contact_id}/reply")
async def reply_to_contact(
    contact_id: UUID,
    request: Request,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    side_effects=Depends(get_side_effects),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ContactReply, fields)
    contact = await ContactService(db, side_effects=side_effects).reply(contact_id, data.reply_message, admin)
    return {"success": True, "message": "Reply sent successfully", "contact": serialize(ContactOut, contact)}


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: UUID,
    admin: Admin = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await ContactService(db).hard_delete(contact_id)
    return {"success": True, "message": "Contact message deleted"}
