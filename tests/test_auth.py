from datetime import datetime, timedelta, timezone

from jose import jwt

from school_admin.core.config import settings
from school_admin.core.security import create_access_token, decode_access_token, hash_password, verify_password
from school_admin.services.admin_service import AdminService


def test_password_hashing_round_trip():
    hashed = hash_password("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret!", "not-a-bcrypt-hash")


def test_token_carries_admin_id():
    token = create_access_token("8f4c0a4e-5a3d-4d8c-9f51-3c6f3c2b1a00")
    assert decode_access_token(token)["id"] == "8f4c0a4e-5a3d-4d8c-9f51-3c6f3c2b1a00"


def test_expired_and_forged_tokens_are_rejected():
    expired = jwt.encode(
        {"id": "x", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret_key,
        algorithm="HS256",
    )
    forged = jwt.encode({"id": "x"}, "another-secret", algorithm="HS256")
    assert decode_access_token(expired) is None
    assert decode_access_token(forged) is None
    assert decode_access_token("garbage") is None


async def test_login_sets_cookie_and_returns_token(client, admin):
    response = await client.post("/api/auth/login", json={"email": "  ADMIN@dmps.in ", "password": "password123"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["admin"]["email"] == "admin@dmps.in"
    assert body["admin"]["lastLogin"] is not None
    assert "password" not in str(body["admin"]).lower()
    assert response.cookies.get("token") == body["token"]


async def test_login_failures(client, admin, db_session):
    missing = await client.post("/api/auth/login", json={"email": "admin@dmps.in"})
    assert missing.status_code == 400
    assert missing.json()["message"] == "Please provide email and password"

    wrong = await client.post("/api/auth/login", json={"email": "admin@dmps.in", "password": "nope"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid credentials"

    await AdminService(db_session).update(admin.id, {"is_active": False})
    inactive = await client.post("/api/auth/login", json={"email": "admin@dmps.in", "password": "password123"})
    assert inactive.status_code == 401
    assert inactive.json()["message"] == "Your account has been deactivated"


async def test_cookie_takes_precedence_over_header(client, admin, staff):
    client.cookies.set("token", create_access_token(admin.id))
    response = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {create_access_token(staff.id)}"}
    )
    client.cookies.clear()

    assert response.status_code == 200
    assert response.json()["admin"]["email"] == "admin@dmps.in"


async def test_missing_malformed_and_orphaned_tokens(client, db_session, admin):
    assert (await client.get("/api/auth/me")).status_code == 401
    assert (await client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def"})).status_code == 401
    assert (await client.get("/api/auth/me", headers={"Authorization": "Token xyz"})).status_code == 401

    token = create_access_token(admin.id)
    await AdminService(db_session).hard_delete(admin.id)
    gone = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert gone.status_code == 401
    assert gone.json()["message"] == "Admin no longer exists or is inactive"


async def test_logout_clears_cookie(client):
    response = await client.post("/api/auth/logout")
    assert response.json() == {"success": True, "message": "Logged out successfully"}
    assert 'token=""' in response.headers["set-cookie"] or "token=;" in response.headers["set-cookie"]


async def test_profile_update_rejects_taken_email(client, admin_headers, staff):
    taken = await client.put("/api/auth/profile", headers=admin_headers, json={"email": "staff@dmps.in"})
    assert taken.status_code == 400
    assert taken.json()["message"] == "Email already exists"

    renamed = await client.put("/api/auth/profile", headers=admin_headers, json={"name": "Head Clerk"})
    assert renamed.status_code == 200
    assert renamed.json()["message"] == "Profile updated successfully"
    assert renamed.json()["admin"]["name"] == "Head Clerk"


async def test_change_password(client, admin_headers):
    short = await client.put("/api/auth/change-password", headers=admin_headers,
                             json={"currentPassword": "password123", "newPassword": "abc"})
    assert short.status_code == 400
    assert short.json()["message"] == "Password must be at least 6 characters"

    wrong = await client.put("/api/auth/change-password", headers=admin_headers,
                             json={"currentPassword": "nope", "newPassword": "abcdef"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Current password is incorrect"

    ok = await client.put("/api/auth/change-password", headers=admin_headers,
                          json={"currentPassword": "password123", "newPassword": "abcdef"})
    assert ok.json() == {"success": True, "message": "Password changed successfully"}

    login = await client.post("/api/auth/login", json={"email": "admin@dmps.in", "password": "abcdef"})
    assert login.status_code == 200
