# school_admin/services/admin_service.py
"""Admin accounts: login, profile and password management."""
from typing import Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import ConflictError, Unauthenticated, ValidationError
from ..core.security import create_access_token, hash_password, verify_password
from ..models.admin import Admin, AdminRole
from ..models.base import utcnow
from ..schemas.auth_schemas import ChangePasswordRequest, ProfileUpdate

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AdminService(BaseService[Admin]):
    resource_name = "Admin"

    def __init__(self, db: AsyncSession):
        super().__init__(Admin, db)

    async def get_by_email(self, email: str) -> Optional[Admin]:
        stmt = select(Admin).where(func.lower(Admin.email) == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_admin(self, name: str, email: str, password: str,
                           role: AdminRole = AdminRole.ADMIN) -> Admin:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if await self.get_by_email(email):
            raise ConflictError("Email already exists")
        admin = await self.create({
            "name": name,
            "email": email.strip().lower(),
            "password_hash": hash_password(password),
            "role": role,
        })
        logger.info(f"Created {role.value} account {admin.email}")
        return admin

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[Admin, str]:
        if not email or not password:
            raise ValidationError("Please provide email and password")

        admin = await self.get_by_email(email)
        if admin is None or not verify_password(password, admin.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise Unauthenticated("Invalid credentials")
        if not admin.is_active:
            raise Unauthenticated("Your account has been deactivated")

        admin.last_login = utcnow()
        await self.db.commit()
        await self.db.refresh(admin)
        logger.info(f"Admin {admin.email} logged in")
        return admin, create_access_token(admin.id)

    async def update_profile(self, admin_id: UUID, data: ProfileUpdate) -> Admin:
        admin = await self.get_or_404(admin_id)
        values = data.model_dump(exclude_none=True)

        if "email" in values:
            values["email"] = values["email"].strip().lower()
            if values["email"] != admin.email:
                existing = await self.get_by_email(values["email"])
                if existing is not None and existing.id != admin.id:
                    raise ValidationError("Email already exists")

        return await self.update(admin.id, values)

    async def change_password(self, admin_id: UUID, data: ChangePasswordRequest) -> Admin:
        if not data.current_password or not data.new_password:
            raise ValidationError("Please provide current and new password")
        if len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        admin = await self.get_or_404(admin_id)
        if not verify_password(data.current_password, admin.password_hash):
            raise Unauthenticated("Current password is incorrect")

        admin = await self.update(admin.id, {"password_hash": hash_password(data.new_password)})
        logger.info(f"Admin {admin.email} changed password")
        return admin
