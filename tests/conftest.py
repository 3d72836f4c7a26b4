import json
import os
import tempfile

# Settings are read at import time. A file database gives every session its own
# connection, so request and side-effect transactions stay apart.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(), "school_admin_test.db")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ADMIN_INBOX", "office@dmps.in")

import httpx
import pytest

from school_admin.core.database import AsyncBackgroundSessionLocal, AsyncSessionLocal, engine
from school_admin.core.dependencies import get_payment_gateway, get_side_effects, get_storage
from school_admin.core.security import create_access_token
from school_admin.gateways.payments import RazorpayGateway
from school_admin.gateways.storage import CloudinaryStorage
from school_admin.main import app
from school_admin.models import Base
from school_admin.models.admin import AdminRole
from school_admin.services.admin_service import AdminService
from school_admin.services.side_effects import SideEffects

RAZORPAY_SECRET = "rzp_test_secret"


class SentEmails(list):
    """Email sender double: records (to, subject, html)"""

    def __call__(self, to, subject, html):
        self.append((to, subject, html))


class StorageBackend:
    """Answers Cloudinary REST calls made through httpx.MockTransport"""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_uploads = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/auto/upload"):
            if self.fail_uploads:
                return httpx.Response(500, json={"error": {"message": "unavailable"}})
            public_id = f"dmps/file{len(self.uploads) + 1}"
            self.uploads.append(public_id)
            return httpx.Response(200, json={
                "secure_url": f"https://res.cloudinary.test/{public_id}.jpg",
                "public_id": public_id,
            })
        if request.url.path.endswith("/image/destroy"):
            body = request.content.decode()
            self.deleted.append(body)
            return httpx.Response(200, json={"result": "ok"})
        return httpx.Response(404)


class PaymentBackend:
    """Answers Razorpay order creation"""

    def __init__(self):
        self.orders = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        order = {
            "id": f"order_{len(self.orders) + 1:04d}",
            "amount": payload["amount"],
            "currency": payload["currency"],
            "receipt": payload["receipt"],
        }
        self.orders.append(order)
        return httpx.Response(200, json=order)


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def sent_emails():
    return SentEmails()


@pytest.fixture
async def side_effects(sent_emails):
    dispatcher = SideEffects(AsyncBackgroundSessionLocal, email_sender=sent_emails)
    yield dispatcher
    await dispatcher.drain()


@pytest.fixture
def storage_backend():
    return StorageBackend()


@pytest.fixture
async def storage(storage_backend):
    client = httpx.AsyncClient(transport=httpx.MockTransport(storage_backend.handler))
    gateway = CloudinaryStorage("demo", "key", "cloud-secret", client=client)
    yield gateway
    await gateway.aclose()


@pytest.fixture
def payment_backend():
    return PaymentBackend()


@pytest.fixture
async def payments(payment_backend):
    client = httpx.AsyncClient(transport=httpx.MockTransport(payment_backend.handler))
    gateway = RazorpayGateway("rzp_test_key", RAZORPAY_SECRET, client=client)
    yield gateway
    await gateway.aclose()


@pytest.fixture
async def client(storage, payments, side_effects):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_payment_gateway] = lambda: payments
    app.dependency_overrides[get_side_effects] = lambda: side_effects
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_admin(email: str, role: AdminRole):
    async with AsyncSessionLocal() as session:
        return await AdminService(session).create_admin("Office Admin", email, "password123", role)


@pytest.fixture
async def admin():
    return await _make_admin("admin@dmps.in", AdminRole.ADMIN)


@pytest.fixture
async def staff():
    return await _make_admin("staff@dmps.in", AdminRole.STAFF)


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin.id)}"}


@pytest.fixture
def staff_headers(staff):
    return {"Authorization": f"Bearer {create_access_token(staff.id)}"}


@pytest.fixture
def application_payload():
    return {
        "firstName": "Aarav",
        "lastName": "Sharma",
        "dateOfBirth": "2016-04-12",
        "gender": "Male",
        "classApplied": "III",
        "fatherName": "Rakesh Sharma",
        "fatherPhone": "9876543210",
        "fatherEmail": "parent@dmps.in",
        "motherName": "Sunita Sharma",
        "address": {"street": "12 MG Road", "city": "Patna", "state": "Bihar", "pincode": "800001"},
    }
