# school_admin/services/contact_service.py
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.config import settings
from ..core.exceptions import ValidationError
from ..gateways import email_templates
from ..models.admin import Admin
from ..models.base import utcnow
from ..models.contact import Contact, ContactStatus
from ..models.notification import NotificationPriority, NotificationType, RelatedModel
from ..schemas.site_schemas import ContactCreate

logger = logging.getLogger(__name__)


class ContactService(BaseService[Contact]):
    resource_name = "Contact message"

    def __init__(self, db: AsyncSession, side_effects=None):
        super().__init__(Contact, db)
        self.side_effects = side_effects

    async def submit(self, data: ContactCreate) -> Contact:
        if data.missing_fields():
            raise ValidationError("All fields are required")

        contact = await self.create({
            "name": data.name,
            "email": data.email.strip().lower(),
            "phone": data.phone,
            "subject": data.subject,
            "message": data.message,
            "status": ContactStatus.NEW,
        })
        logger.info(f"Contact message {contact.id} received from {contact.email}")

        if self.side_effects is not None:
            self.side_effects.notify(
                type=NotificationType.CONTACT,
                title="New Contact Form Submission",
                message=f'{contact.name} submitted a contact form: "{contact.subject}"',
                link="/admin/contacts",
                related_id=contact.id,
                related_model=RelatedModel.CONTACT,
                priority=NotificationPriority.MEDIUM,
            )
            subject, html = email_templates.contact_received(contact)
            self.side_effects.email(settings.admin_inbox or settings.smtp_user, subject, html)
        return contact

    async def list_filtered(self, status: Optional[ContactStatus] = None,
                            page: int = 1, limit: int = 20) -> Dict[str, Any]:
        stmt = select(Contact)
        if status:
            stmt = stmt.where(Contact.status == status)
        return await self.get_paginated(stmt, page=page, size=limit, order_by=(Contact.created_at.desc(),))

    async def open_message(self, contact_id: UUID) -> Contact:
        """Fetch for an admin; an unseen message becomes read"""
        contact = await self.get_or_404(contact_id)
        if contact.status == ContactStatus.NEW:
            contact.status = ContactStatus.READ
            await self.db.commit()
            await self.db.refresh(contact)
        return contact

    async def reply(self, contact_id: UUID, reply_message: Optional[str], admin: Admin) -> Contact:
        if not reply_message or not reply_message.strip():
            raise ValidationError("Reply message is required")

        contact = await self.update(contact_id, {
            "status": ContactStatus.REPLIED,
            "reply_message": reply_message,
            "replied_at": utcnow(),
            "replied_by": admin.id,
        })
        logger.info(f"Contact message {contact.id} replied by {admin.email}")

        if self.side_effects is not None:
            subject, html = email_templates.contact_reply(contact)
            self.side_effects.email(contact.email, subject, html)
        return contact
