import logging

import pytest
from sqlalchemy import func, select

from school_admin.core.database import AsyncBackgroundSessionLocal, AsyncSessionLocal
from school_admin.core.dependencies import get_side_effects
from school_admin.main import app
from school_admin.models.contact import Contact
from school_admin.models.notification import NotificationPriority, NotificationType, RelatedModel
from school_admin.services.notification_service import NotificationService
from school_admin.services.side_effects import SideEffects


class BrokenSession:
    """Session factory whose sessions fail on first use"""

    async def __aenter__(self):
        raise ConnectionError("database unavailable")

    async def __aexit__(self, *exc):
        return False


async def _notification(db_session, **overrides):
    fields = dict(
        type=NotificationType.SYSTEM,
        title="Backup finished",
        message="Nightly backup completed",
        priority=NotificationPriority.LOW,
    )
    fields.update(overrides)
    return await NotificationService(db_session).create_notification(**fields)


async def test_raise_notification_swallows_failures(db_session, caplog):
    service = NotificationService(db_session)
    result = await service.raise_notification(type="bogus", title="t", message="m")
    assert result is None
    assert "Error creating notification" in caplog.text

    stored = await service.raise_notification(type=NotificationType.OTHER, title="t", message="m")
    assert stored is not None
    assert stored.priority == NotificationPriority.MEDIUM


async def test_failed_side_effect_does_not_fail_the_request(client, caplog):
    failing = SideEffects(lambda: BrokenSession(), email_sender=lambda *args: None)

    app.dependency_overrides[get_side_effects] = lambda: failing

    with caplog.at_level(logging.ERROR, logger="school_admin.services.side_effects"):
        response = await client.post("/api/contact", json={
            "name": "Ravi",
            "email": "ravi@dmps.in",
            "phone": "9000000000",
            "subject": "Bus route",
            "message": "Is there a bus from Kankarbagh?",
        })
        await failing.drain()

    assert response.status_code == 201
    assert response.json()["message"] == "Your message has been submitted successfully"
    assert failing.failures["notification"] == 1
    assert failing.failures["email"] == 0
    assert "notification side effect failed" in caplog.text

    async with AsyncSessionLocal() as session:
        assert (await session.execute(select(func.count()).select_from(Contact))).scalar() == 1


async def test_rejected_notification_is_counted(caplog, db_session):
    effects = SideEffects(AsyncBackgroundSessionLocal, email_sender=lambda *args: None)
    effects.notify(type="bogus", title="t", message="m")
    effects.notify(type=NotificationType.SYSTEM, title="Backup finished", message="ok")
    await effects.drain()

    assert effects.failures["notification"] == 1
    assert "Error creating notification" in caplog.text
    result = await NotificationService(db_session).list_filtered()
    assert [n.title for n in result["items"]] == ["Backup finished"]


async def test_email_without_recipient_is_skipped(sent_emails):
    effects = SideEffects(AsyncBackgroundSessionLocal, email_sender=sent_emails)
    effects.email(None, "subject", "<p>body</p>")
    assert effects.pending == 0
    await effects.drain()
    assert sent_emails == []


async def test_failing_email_sender_is_counted():
    def explode(to, subject, html):
        raise RuntimeError("broker down")

    effects = SideEffects(AsyncBackgroundSessionLocal, email_sender=explode)
    effects.email("parent@dmps.in", "Hello", "<p>hi</p>")
    await effects.drain()
    assert effects.failures["email"] == 1


async def test_list_and_unread_count(client, admin_headers, db_session):
    await _notification(db_session)
    await _notification(db_session, type=NotificationType.PAYMENT, title="Fee paid")
    read = await _notification(db_session, title="Old")
    await NotificationService(db_session).mark_read(read.id)

    response = await client.get("/api/notifications", headers=admin_headers, params={"isRead": "false"})
    body = response.json()
    assert body["count"] == 2
    assert body["unreadCount"] == 2

    by_type = await client.get("/api/notifications", headers=admin_headers, params={"type": "payment"})
    assert [n["title"] for n in by_type.json()["notifications"]] == ["Fee paid"]

    count = await client.get("/api/notifications/unread-count", headers=admin_headers)
    assert count.json() == {"success": True, "count": 2}


async def test_mark_read_and_read_all(client, admin_headers, db_session):
    first = await _notification(db_session, related_model=RelatedModel.FEE)
    await _notification(db_session)

    response = await client.put(f"/api/notifications/{first.id}/read", headers=admin_headers)
    notification = response.json()["notification"]
    assert notification["isRead"] is True
    assert notification["readAt"] is not None
    assert notification["relatedModel"] == "Fee"

    response = await client.put("/api/notifications/read-all", headers=admin_headers)
    assert response.json()["message"] == "All notifications marked as read"
    assert response.json()["updated"] == 1

    count = await client.get("/api/notifications/unread-count", headers=admin_headers)
    assert count.json()["count"] == 0


async def test_delete_notification(client, admin_headers, db_session):
    notification = await _notification(db_session)

    response = await client.delete(f"/api/notifications/{notification.id}", headers=admin_headers)
    assert response.json() == {"success": True, "message": "Notification deleted"}

    again = await client.delete(f"/api/notifications/{notification.id}", headers=admin_headers)
    assert again.status_code == 404


async def test_notifications_require_admin_role(client, staff_headers):
    response = await client.get("/api/notifications", headers=staff_headers)
    assert response.status_code == 403


@pytest.mark.parametrize("path", ["/api/notifications", "/api/notifications/unread-count"])
async def test_notifications_require_authentication(client, path):
    response = await client.get(path)
    assert response.status_code == 401
