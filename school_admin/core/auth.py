# school_admin/core/auth.py
"""Auth gate: resolve the calling admin from cookie or bearer token."""
from typing import Optional
from uuid import UUID
import logging

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database import get_db
from .exceptions import Unauthenticated, Forbidden
from .security import decode_access_token
from ..models.admin import Admin, AdminRole

logger = logging.getLogger(__name__)

ADMIN_ROLES = (AdminRole.ADMIN, AdminRole.SUPER_ADMIN)


def extract_token(request: Request) -> Optional[str]:
    """Cookie wins over the Authorization header"""
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None


async def get_current_admin(request: Request, db: AsyncSession = Depends(get_db)) -> Admin:
    token = extract_token(request)
    if not token:
        raise Unauthenticated()

    claims = decode_access_token(token)
    if not claims or "id" not in claims:
        raise Unauthenticated()

    try:
        admin_id = UUID(str(claims["id"]))
    except ValueError:
        raise Unauthenticated()

    result = await db.execute(select(Admin).where(Admin.id == admin_id))
    admin = result.scalar_one_or_none()
    if not admin or not admin.is_active:
        raise Unauthenticated("Admin no longer exists or is inactive")
    return admin


def authorize(admin: Admin, roles) -> Admin:
    if admin.role not in roles:
        raise Forbidden(admin.role.value)
    return admin


def require_roles(*roles: AdminRole):
    """Dependency factory: authenticated admin holding one of `roles`"""
    async def dependency(admin: Admin = Depends(get_current_admin)) -> Admin:
        return authorize(admin, roles)
    return dependency


require_admin = require_roles(*ADMIN_ROLES)
