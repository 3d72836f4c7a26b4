from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_admin
from ..core.config import settings
from ..core.database import get_db
from ..models.admin import Admin
from ..schemas.auth_schemas import AdminOut, ChangePasswordRequest, LoginRequest, ProfileUpdate
from ..schemas.common import parse_payload, serialize
from ..services.admin_service import AdminService
from ..utils.forms import read_payload

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login")
async def login(request: Request, response: Response, db: AsyncSession = Depends(get_db)):
    fields, _ = await read_payload(request)
    credentials = parse_payload(LoginRequest, fields)

    admin, token = await AdminService(db).login(credentials.email, credentials.password)
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.jwt_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="strict" if settings.is_production else "lax",
    )
    return {"success": True, "token": token, "admin": serialize(AdminOut, admin)}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.auth_cookie_name)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me")
async def me(admin: Admin = Depends(get_current_admin)):
    return {"success": True, "admin": serialize(AdminOut, admin)}


@router.put("/profile")
async def update_profile(
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ProfileUpdate, fields)
    updated = await AdminService(db).update_profile(admin.id, data)
    return {"success": True, "message": "Profile updated successfully", "admin": serialize(AdminOut, updated)}


@router.put("/change-password")
async def change_password(
    request: Request,
    admin: Admin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    fields, _ = await read_payload(request)
    data = parse_payload(ChangePasswordRequest, fields)
    await AdminService(db).change_password(admin.id, data)
    return {"success": True, "message": "Password changed successfully"}
