from datetime import date, timedelta

from school_admin.models.base import utcnow
from school_admin.models.fee import PaymentMode
from school_admin.models.student import ClassName, Gender, Student
from school_admin.schemas.fee_schemas import FeeCreate
from school_admin.schemas.site_schemas import NoticeCreate
from school_admin.services.fee_service import FeeService
from school_admin.services.gallery_service import video_thumbnail
from school_admin.services.notice_service import NoticeService

STUDENT = {
    "firstName": "Kabir",
    "lastName": "Singh",
    "dateOfBirth": "2014-09-02",
    "gender": "Male",
    "class": "V",
    "fatherName": "Harish Singh",
    "fatherPhone": "9000000002",
    "motherName": "Meera Singh",
    "academicYear": "2026-2027",
}

TEACHER = {
    "firstName": "Anita",
    "lastName": "Rao",
    "email": "Anita.Rao@dmps.in",
    "phone": "9000000003",
    "qualification": "M.Sc, B.Ed",
    "subject": "Mathematics",
}


async def _notice(db_session, admin, **fields):
    data = NoticeCreate.model_validate(dict({"title": "Notice", "description": "Details"}, **fields))
    return await NoticeService(db_session).create_notice(data, admin)


# Students

async def test_student_crud(client, admin_headers):
    created = await client.post("/api/students", headers=admin_headers, json=STUDENT)
    assert created.status_code == 201
    student = created.json()["student"]
    assert student["admissionNumber"].startswith("ADM")
    assert student["section"] == "A"

    updated = await client.put(f"/api/students/{student['id']}", headers=admin_headers,
                               json={"section": "C", "email": "KABIR@dmps.in"})
    assert updated.json()["student"]["section"] == "C"
    assert updated.json()["student"]["email"] == "kabir@dmps.in"

    listed = await client.get("/api/students", headers=admin_headers, params={"class": "V"})
    assert listed.json()["total"] == 1

    deleted = await client.delete(f"/api/students/{student['id']}", headers=admin_headers)
    assert deleted.json() == {"success": True, "message": "Student deleted"}

    missing = await client.get(f"/api/students/{student['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Student not found"


async def test_student_stats_route_is_not_shadowed(client, admin_headers):
    for class_name in ("X", "V", "V"):
        await client.post("/api/students", headers=admin_headers, json=dict(STUDENT, **{"class": class_name}))

    response = await client.get("/api/students/stats/overview", headers=admin_headers)

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["total"] == 3
    assert stats["byClass"] == [{"class": "V", "count": 2}, {"class": "X", "count": 1}]
    assert stats["byGender"] == [{"gender": "Male", "count": 3}]


async def test_deleting_student_keeps_fee_history(client, admin_headers, db_session):
    student = Student(
        admission_number="ADM202654321", first_name="Ira", last_name="Das", date_of_birth=date(2013, 3, 3),
        gender=Gender.FEMALE, class_name=ClassName.VI, father_name="Dev Das", father_phone="9000000004",
        mother_name="Ria Das", academic_year="2026-2027",
    )
    db_session.add(student)
    await db_session.commit()
    fee = await FeeService(db_session).create_fee_record(
        FeeCreate.model_validate({"studentId": str(student.id), "feeStructure": {"tuitionFee": 100}})
    )
    await FeeService(db_session).record_payment(fee.id, 100, PaymentMode.CASH)

    await client.delete(f"/api/students/{student.id}", headers=admin_headers)

    response = await client.get(f"/api/fees/{fee.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["fee"]["admissionNumber"] == "ADM202654321"
    assert response.json()["fee"]["student"] is None


# Teachers

async def test_teacher_create_with_photo_and_classes(client, admin_headers, storage_backend):
    response = await client.post(
        "/api/teachers",
        headers=admin_headers,
        data=dict(TEACHER, classes=["IX", "X"]),
        files={"photo": ("anita.jpg", b"jpeg", "image/jpeg")},
    )

    assert response.status_code == 201
    teacher = response.json()["teacher"]
    assert teacher["employeeId"].startswith("EMP")
    assert teacher["email"] == "anita.rao@dmps.in"
    assert teacher["classes"] == ["IX", "X"]
    assert teacher["photo"] == "https://res.cloudinary.test/dmps/file1.jpg"
    assert teacher["designation"] == "Teacher"

    public = await client.get("/api/teachers", params={"subject": "Mathematics"})
    assert public.json()["count"] == 1


async def test_teacher_duplicate_email_is_conflict(client, admin_headers):
    await client.post("/api/teachers", headers=admin_headers, json=TEACHER)
    again = await client.post("/api/teachers", headers=admin_headers, json=dict(TEACHER, phone="9111111111"))
    assert again.status_code == 400


async def test_inactive_teachers_hidden_by_default(client, admin_headers):
    created = await client.post("/api/teachers", headers=admin_headers, json=dict(TEACHER, isActive=False))
    teacher_id = created.json()["teacher"]["id"]

    assert (await client.get("/api/teachers")).json()["count"] == 0
    assert (await client.get("/api/teachers", params={"isActive": "false"})).json()["count"] == 1

    await client.delete(f"/api/teachers/{teacher_id}", headers=admin_headers)
    missing = await client.get(f"/api/teachers/{teacher_id}")
    assert missing.json() == {"success": False, "message": "Teacher not found"}


# Notices

async def test_notice_requires_title_and_description(client, admin_headers):
    response = await client.post("/api/notices", headers=admin_headers, json={"title": "Holiday"})
    assert response.status_code == 400
    assert response.json()["message"] == "Title and description are required"


async def test_empty_notice_list(client):
    response = await client.get("/api/notices")
    assert response.status_code == 200
    assert response.json()["notices"] == []
    assert response.json()["total"] == 0


async def test_notice_order_and_display_window(client, admin, db_session):
    await _notice(db_session, admin, title="Low", priority="Low")
    await _notice(db_session, admin, title="Urgent", priority="Urgent")
    await _notice(db_session, admin, title="Pinned", priority="Low", isPinned=True)
    await _notice(db_session, admin, title="Medium")
    await _notice(db_session, admin, title="Future", startDate=(utcnow() + timedelta(days=2)).isoformat())
    await _notice(db_session, admin, title="Expired", endDate=(utcnow() - timedelta(days=1)).isoformat())

    response = await client.get("/api/notices")

    titles = [n["title"] for n in response.json()["notices"]]
    assert titles == ["Pinned", "Urgent", "Medium", "Low"]


async def test_notice_attachment_is_replaced(client, admin_headers, storage_backend):
    created = await client.post(
        "/api/notices",
        headers=admin_headers,
        data={"title": "Exam timetable", "description": "Attached", "category": "Exam"},
        files={"attachment": ("timetable.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert created.status_code == 201
    notice = created.json()["notice"]
    assert notice["attachment"] == {
        "url": "https://res.cloudinary.test/dmps/file1.jpg",
        "cloudinaryId": "dmps/file1",
        "fileName": "timetable.pdf",
    }

    updated = await client.put(
        f"/api/notices/{notice['id']}",
        headers=admin_headers,
        data={"isPinned": "true"},
        files={"attachment": ("timetable-v2.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert updated.json()["notice"]["attachment"]["cloudinaryId"] == "dmps/file2"
    assert updated.json()["notice"]["isPinned"] is True
    assert "dmps%2Ffile1" in storage_backend.deleted[0]


async def test_disallowed_upload_type(client, admin_headers, storage_backend):
    response = await client.post(
        "/api/notices",
        headers=admin_headers,
        data={"title": "Circular", "description": "See file"},
        files={"attachment": ("run.sh", b"#!/bin/sh", "text/x-sh")},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Only images and PDF files are allowed"
    assert storage_backend.uploads == []


# Gallery

def test_video_thumbnail_derivation():
    assert video_thumbnail("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10") == \
        "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
    assert video_thumbnail("https://youtu.be/abc123") == "https://img.youtube.com/vi/abc123/maxresdefault.jpg"
    assert video_thumbnail("https://vimeo.com/76979871") == "https://vumbnail.com/76979871.jpg"
    assert video_thumbnail("https://example.com/clip.mp4") == ""


async def test_video_gallery_derives_thumbnail(client, admin_headers):
    response = await client.post("/api/gallery", headers=admin_headers, json={
        "title": "Annual Day 2026",
        "category": "Annual Day",
        "videoUrl": "https://youtu.be/abc123",
    })

    assert response.status_code == 201
    gallery = response.json()["gallery"]
    assert gallery["type"] == "video"
    assert gallery["images"] == []
    assert gallery["thumbnail"] == "https://img.youtube.com/vi/abc123/maxresdefault.jpg"


async def test_photo_gallery_needs_images(client, admin_headers):
    response = await client.post("/api/gallery", headers=admin_headers,
                                 json={"title": "Sports Day", "category": "Sports"})
    assert response.status_code == 400
    assert response.json()["message"] == "At least one image is required for photo galleries"


async def test_photo_gallery_lifecycle(client, admin_headers, storage_backend):
    created = await client.post(
        "/api/gallery",
        headers=admin_headers,
        data={"title": "Science Fair", "category": "Academic"},
        files=[
            ("images", ("a.jpg", b"a", "image/jpeg")),
            ("images", ("b.jpg", b"b", "image/jpeg")),
        ],
    )
    gallery = created.json()["gallery"]
    assert gallery["type"] == "photo"
    assert gallery["thumbnail"] == gallery["images"][0]["url"]
    assert len(gallery["images"]) == 2

    updated = await client.put(
        f"/api/gallery/{gallery['id']}",
        headers=admin_headers,
        data={"title": "Science Fair 2026"},
        files=[("images", ("c.jpg", b"c", "image/jpeg"))],
    )
    assert len(updated.json()["gallery"]["images"]) == 3

    listed = await client.get("/api/gallery", params={"category": "Academic", "type": "photo"})
    assert listed.json()["total"] == 1

    deleted = await client.delete(f"/api/gallery/{gallery['id']}", headers=admin_headers)
    assert deleted.json()["message"] == "Gallery deleted"
    assert len(storage_backend.deleted) == 3


# Contact

async def test_contact_requires_all_fields(client):
    response = await client.post("/api/contact", json={"name": "Ravi", "email": "ravi@dmps.in"})
    assert response.status_code == 400
    assert response.json()["message"] == "All fields are required"


async def test_contact_read_and_reply(client, admin_headers, side_effects, sent_emails):
    submitted = await client.post("/api/contact", json={
        "name": "Ravi",
        "email": "Ravi@DMPS.in",
        "phone": "9000000000",
        "subject": "Transfer certificate",
        "message": "How long does it take?",
    })
    contact = submitted.json()["contact"]
    assert contact["status"] == "new"
    assert contact["email"] == "ravi@dmps.in"

    opened = await client.get(f"/api/contact/{contact['id']}", headers=admin_headers)
    assert opened.json()["contact"]["status"] == "read"

    empty = await client.put(f"/api/contact/{contact['id']}/reply", headers=admin_headers, json={"replyMessage": " "})
    assert empty.json()["message"] == "Reply message is required"

    replied = await client.put(f"/api/contact/{contact['id']}/reply", headers=admin_headers,
                               json={"replyMessage": "About a week."})
    assert replied.json()["message"] == "Reply sent successfully"
    assert replied.json()["contact"]["status"] == "replied"
    assert replied.json()["contact"]["repliedAt"] is not None

    await side_effects.drain()
    recipients = [(to, subject) for to, subject, _ in sent_emails]
    assert ("office@dmps.in", "New Contact Form Submission: Transfer certificate") in recipients
    assert ("ravi@dmps.in", "Re: Transfer certificate") in recipients

    listed = await client.get("/api/contact", headers=admin_headers, params={"status": "replied"})
    assert listed.json()["count"] == 1


# Content

async def test_content_upsert_and_public_read(client, admin_headers):
    missing = await client.get("/api/admin/content/about")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Content not found"

    created = await client.put("/api/admin/content/about", headers=admin_headers,
                               json={"title": "About us", "content": "<p>Founded 1998</p>", "type": "html"})
    assert created.json()["content"]["key"] == "about"

    updated = await client.put("/api/admin/content/about", headers=admin_headers,
                               json={"title": "About us", "content": "<p>Founded 1999</p>", "type": "html"})
    assert updated.json()["content"]["id"] == created.json()["content"]["id"]

    public = await client.get("/api/admin/content/about")
    assert public.json()["content"]["content"] == "<p>Founded 1999</p>"

    await client.put("/api/admin/content/about", headers=admin_headers,
                     json={"title": "About us", "content": "hidden", "isActive": False})
    assert (await client.get("/api/admin/content/about")).status_code == 404


# Dashboard and health

async def test_dashboard_overview(client, admin_headers, application_payload, db_session, admin):
    await client.post("/api/admissions", json=application_payload)
    await client.post("/api/students", headers=admin_headers, json=STUDENT)
    await client.post("/api/teachers", headers=admin_headers, json=TEACHER)
    await _notice(db_session, admin, title="Welcome back")

    response = await client.get("/api/admin/dashboard", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["totalStudents"] == 1
    assert body["stats"]["pendingAdmissions"] == 1
    assert body["stats"]["totalTeachers"] == 1
    assert body["stats"]["newContacts"] == 0
    assert body["stats"]["studentsByClass"] == [{"class": "V", "count": 1}]
    assert body["stats"]["feeStats"] == []
    assert [n["title"] for n in body["recentNotices"]] == ["Welcome back"]
    assert len(body["recentAdmissions"]) == 1


async def test_dashboard_requires_admin_role(client, staff_headers):
    response = await client.get("/api/admin/dashboard", headers=staff_headers)
    assert response.status_code == 403


async def test_health(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert response.json()["success"] is True
