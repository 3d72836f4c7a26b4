import pytest
from sqlalchemy import func, select

from school_admin.core.database import AsyncSessionLocal
from school_admin.core.exceptions import ConflictError
from school_admin.models.admission import Admission, AdmissionStatus
from school_admin.models.notification import Notification, NotificationPriority, NotificationType
from school_admin.models.student import Student
from school_admin.schemas.admission_schemas import AdmissionCreate
from school_admin.services.admission_service import AdmissionService


async def _count(db_session, model, *criteria):
    stmt = select(func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    return (await db_session.execute(stmt)).scalar()


async def _submit(db_session, payload):
    return await AdmissionService(db_session).submit(AdmissionCreate.from_payload(payload))


async def test_submit_creates_pending_application(client, application_payload, side_effects, sent_emails, db_session):
    response = await client.post("/api/admissions", json=application_payload)

    assert response.status_code == 201
    admission = response.json()["admission"]
    assert admission["status"] == "pending"
    assert admission["applicationNumber"].startswith("DMPS")
    assert len(admission["applicationNumber"]) == 12
    assert admission["address"]["city"] == "Patna"

    await side_effects.drain()
    [notification] = (await db_session.execute(select(Notification))).scalars().all()
    assert notification.type == NotificationType.ADMISSION
    assert notification.priority == NotificationPriority.HIGH
    assert notification.title == "New Admission Application"
    assert notification.message == "Aarav Sharma applied for Class III"
    assert notification.link == "/admin/admissions"

    [(to, subject, html)] = sent_emails
    assert to == "parent@dmps.in"
    assert "Admission Application Received" in subject
    assert admission["applicationNumber"] in html


async def test_submit_from_multipart_with_flattened_address(client, application_payload, storage_backend):
    form = {k: v for k, v in application_payload.items() if k != "address"}
    form.update({
        "address.street": "12 MG Road",
        "address.city": "Patna",
        "address.state": "Bihar",
        "address.pincode": "800001",
    })
    files = {"photo": ("aarav.png", b"\x89PNG fake", "image/png")}

    response = await client.post("/api/admissions", data=form, files=files)

    assert response.status_code == 201
    admission = response.json()["admission"]
    assert admission["photo"] == "https://res.cloudinary.test/dmps/file1.jpg"
    assert admission["address"] == {"street": "12 MG Road", "city": "Patna", "state": "Bihar", "pincode": "800001"}


async def test_incomplete_address_is_rejected_before_upload(client, application_payload, storage_backend, db_session):
    application_payload["address"] = {"street": "12 MG Road", "city": "Patna", "state": "Bihar"}

    response = await client.post("/api/admissions", json=application_payload)

    assert response.status_code == 400
    assert response.json()["message"] == "All address fields (street, city, state, pincode) are required"
    assert storage_backend.uploads == []
    assert await _count(db_session, Admission) == 0


async def test_photo_upload_failure_aborts_submission(client, application_payload, storage_backend, db_session):
    storage_backend.fail_uploads = True
    form = {k: v for k, v in application_payload.items() if k != "address"}
    form["address"] = '{"street": "1 Main", "city": "Gaya", "state": "Bihar", "pincode": "823001"}'

    response = await client.post("/api/admissions", data=form, files={"photo": ("p.jpg", b"jpeg", "image/jpeg")})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Error uploading photo"}
    assert await _count(db_session, Admission) == 0


async def test_approve_creates_exactly_one_student(client, admin_headers, application_payload, db_session, sent_emails, side_effects):
    admission = await _submit(db_session, application_payload)

    response = await client.put(
        f"/api/admissions/{admission.id}/approve",
        headers=admin_headers,
        json={"section": "B", "rollNumber": "17", "remarks": "Welcome"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Admission approved successfully"
    student = body["student"]
    assert student["admissionNumber"].startswith("ADM")
    assert student["class"] == "III"
    assert student["section"] == "B"
    assert student["rollNumber"] == "17"
    assert student["email"] == "parent@dmps.in"
    assert student["isApproved"] is True
    assert body["admission"]["status"] == "approved"
    assert body["admission"]["approvedAt"] is not None

    second = await client.put(f"/api/admissions/{admission.id}/approve", headers=admin_headers, json={})
    assert second.status_code == 400
    assert second.json()["message"] == "Admission already approved"
    assert await _count(db_session, Student) == 1

    await side_effects.drain()
    assert any(subject.startswith("Admission Approved") for _, subject, _ in sent_emails)


async def test_approve_defaults_section_to_a(db_session, application_payload, admin):
    admission = await _submit(db_session, application_payload)
    student, _ = await AdmissionService(db_session).approve(admission.id, admin)
    assert student.section == "A"


async def test_stale_approval_loses(db_session, application_payload, admin):
    admission = await _submit(db_session, application_payload)

    async with AsyncSessionLocal() as other:
        rival = AdmissionService(other)
        await rival.get_or_404(admission.id)  # loads version 1 into the rival session

        await AdmissionService(db_session).approve(admission.id, admin)

        with pytest.raises(ConflictError, match="Admission already approved"):
            await rival.approve(admission.id, admin)

    assert await _count(db_session, Student) == 1


async def test_reject_records_remarks(client, admin_headers, application_payload, db_session):
    admission = await _submit(db_session, application_payload)

    response = await client.put(
        f"/api/admissions/{admission.id}/reject", headers=admin_headers, json={"remarks": "Seats full"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Admission rejected"
    assert body["admission"]["status"] == "rejected"
    assert body["admission"]["remarks"] == "Seats full"


async def test_reject_after_approval_is_conflict(db_session, application_payload, admin):
    admission = await _submit(db_session, application_payload)
    service = AdmissionService(db_session)
    await service.approve(admission.id, admin)

    with pytest.raises(ConflictError):
        await service.reject(admission.id, admin)


async def test_list_filters_and_paginates(client, admin_headers, application_payload, db_session):
    for _ in range(3):
        await _submit(db_session, application_payload)
    other = dict(application_payload, classApplied="V")
    await _submit(db_session, other)

    response = await client.get(
        "/api/admissions", headers=admin_headers, params={"classApplied": "III", "limit": 2, "page": 1}
    )

    body = response.json()
    assert body["count"] == 2
    assert body["total"] == 3
    assert body["pages"] == 2
    assert {a["classApplied"] for a in body["admissions"]} == {"III"}


async def test_list_requires_authentication(client):
    response = await client.get("/api/admissions")
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Not authorized to access this route"}


async def test_staff_cannot_approve(client, staff_headers, application_payload, db_session):
    admission = await _submit(db_session, application_payload)

    response = await client.put(f"/api/admissions/{admission.id}/approve", headers=staff_headers, json={})

    assert response.status_code == 403
    refreshed = await db_session.get(Admission, admission.id, populate_existing=True)
    assert refreshed.status == AdmissionStatus.PENDING


async def test_delete_admission(client, admin_headers, application_payload, db_session):
    admission = await _submit(db_session, application_payload)

    response = await client.delete(f"/api/admissions/{admission.id}", headers=admin_headers)
    assert response.status_code == 200

    missing = await client.get(f"/api/admissions/{admission.id}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Admission not found"
