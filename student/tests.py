from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from classroom.models import ClassSession, Attendance
from courses.models import Batch, BatchEnrollment
from student.models import Student, Notification

User = get_user_model()

pytestmark = pytest.mark.django_db


def make_session(batch, topic, status="scheduled", start_offset=timedelta(days=1)):
    start = timezone.now() + start_offset
    return ClassSession.objects.create(
        batch=batch,
        topic=topic,
        start_time=start,
        end_time=start + timedelta(hours=1),
        status=status,
        instructor_name="Anita Rao",
    )


# ---------------------------------------------------------------------------
# Model rules
# ---------------------------------------------------------------------------

def test_signal_creates_profile_only_for_students(db):
    student = User.objects.create_user(username="s@example.com", email="s@example.com", password="x")
    admin = User.objects.create_user(username="a@example.com", email="a@example.com", password="x", role="admin")
    assert Student.objects.filter(user=student).exists()
    assert not Student.objects.filter(user=admin).exists()


def test_attendance_rate_counts_present_on_completed_sessions(enrolled_student, batch):
    done = [make_session(batch, f"Done {i}", status="completed", start_offset=timedelta(days=-i - 1)) for i in range(4)]
    make_session(batch, "Upcoming")

    Attendance.objects.create(session=done[0], student=enrolled_student, status="present")
    Attendance.objects.create(session=done[1], student=enrolled_student, status="present")
    Attendance.objects.create(session=done[2], student=enrolled_student, status="late")
    Attendance.objects.create(session=done[3], student=enrolled_student, status="absent")

    assert enrolled_student.recalculate_attendance_rate() == 50.0
    enrolled_student.refresh_from_db()
    assert enrolled_student.attendance_rate == 50.0


def test_attendance_rate_is_zero_without_completed_sessions(enrolled_student, batch):
    make_session(batch, "Upcoming")
    assert enrolled_student.recalculate_attendance_rate() == 0


def test_attendance_rate_ignores_batches_not_enrolled(enrolled_student, batch):
    other = Batch.objects.create(
        name="Other", level="advanced", schedule_days=["Monday"], schedule_time="8:00 AM",
        capacity=5, instructor_name="X", start_date=timezone.now(), end_date=timezone.now(),
    )
    mine = make_session(batch, "Mine", status="completed", start_offset=timedelta(days=-1))
    theirs = make_session(other, "Theirs", status="completed", start_offset=timedelta(days=-1))
    Attendance.objects.create(session=mine, student=enrolled_student, status="present")
    Attendance.objects.create(session=theirs, student=enrolled_student, status="present")

    assert enrolled_student.recalculate_attendance_rate() == 100.0


def test_apply_payment_partial_and_full(student):
    student.total_due = Decimal("5000.00")
    student.save()

    student.apply_payment(Decimal("2000.00"))
    assert student.total_paid == Decimal("2000.00")
    assert student.total_due == Decimal("3000.00")
    assert student.payment_status == "pending"

    student.apply_payment(Decimal("3500.00"))
    assert student.total_paid == Decimal("5500.00")
    assert student.total_due == Decimal("0.00")
    assert student.payment_status == "paid"
    student.refresh_from_db()
    assert student.credit_balance == Decimal("0.00")


# ---------------------------------------------------------------------------
# Admin students
# ---------------------------------------------------------------------------

def test_admin_creates_student_with_due(admin_client):
    res = admin_client.post("/api/admin/students/", {
        "email": "new@example.com",
        "name": "New Student",
        "phone": "9876543210",
        "total_due": "3000.00",
    }, format="json")
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["payment_status"] == "pending"
    assert data["total_due"] == 3000.0

    student = Student.objects.get(user__email="new@example.com")
    assert student.phone == "9876543210"
    assert not student.user.has_usable_password()


def test_admin_creates_student_without_due_is_paid(admin_client):
    res = admin_client.post("/api/admin/students/", {"email": "free@example.com", "name": "Free"}, format="json")
    assert res.status_code == 201
    assert res.json()["data"]["payment_status"] == "paid"


def test_admin_create_student_duplicate_email(admin_client, student):
    res = admin_client.post("/api/admin/students/", {"email": "priya@example.com", "name": "Dup"}, format="json")
    assert res.status_code == 400
    assert "email" in res.json()["errors"]


def test_admin_create_student_requires_name(admin_client):
    res = admin_client.post("/api/admin/students/", {"email": "x@example.com"}, format="json")
    assert res.status_code == 400


def test_admin_lists_students_with_fallbacks_and_batches(admin_client, enrolled_student):
    res = admin_client.get("/api/admin/students/")
    assert res.status_code == 200
    item = res.json()["data"][0]
    assert item["name"] == "Priya Sharma"
    assert item["phone"] == "N/A"
    assert item["avatar"] == ""
    assert item["batches"][0]["name"] == "Spoken English - Morning"


def test_admin_student_filters(admin_client, student):
    other = User.objects.create_user(username="z@example.com", email="z@example.com", password="x", name="Zed")
    other.student_profile.payment_status = "overdue"
    other.student_profile.save()

    res = admin_client.get("/api/admin/students/", {"search": "priya"})
    assert [s["email"] for s in res.json()["data"]] == ["priya@example.com"]

    res = admin_client.get("/api/admin/students/", {"payment_status": "Overdue"})
    assert [s["email"] for s in res.json()["data"]] == ["z@example.com"]

    res = admin_client.get("/api/admin/students/", {"payment_status": "all"})
    assert len(res.json()["data"]) == 2


def test_admin_updates_student(admin_client, student):
    res = admin_client.put(f"/api/admin/students/{student.id}/", {
        "name": "Priya S.",
        "payment_status": "OVERDUE",
    }, format="json")
    assert res.status_code == 200
    student.refresh_from_db()
    assert student.payment_status == "overdue"
    assert student.user.name == "Priya S."


def test_admin_deletes_student_and_user(admin_client, enrolled_student, student_user):
    res = admin_client.delete(f"/api/admin/students/{enrolled_student.id}/")
    assert res.status_code == 200
    assert not Student.objects.exists()
    assert not BatchEnrollment.objects.exists()
    assert not User.objects.filter(pk=student_user.pk).exists()


def test_admin_students_forbidden_for_students(student_client):
    res = student_client.get("/api/admin/students/")
    assert res.status_code == 403
    assert res.json()["message"] == "Permission denied."


# ---------------------------------------------------------------------------
# Student self-service
# ---------------------------------------------------------------------------

def test_profile_update(student_client, student):
    res = student_client.put("/api/student/profile/", {"name": "Priya K", "phone": "12345"}, format="json")
    assert res.status_code == 200
    student.refresh_from_db()
    assert student.phone == "12345"
    assert student.user.name == "Priya K"


def test_batch_sessions_window(student_client, enrolled_student, batch):
    make_session(batch, "Upcoming")
    make_session(batch, "Live now", status="live", start_offset=timedelta(minutes=-10))
    make_session(batch, "Last week", status="completed", start_offset=timedelta(days=-3))
    make_session(batch, "Long ago", status="completed", start_offset=timedelta(days=-30))
    make_session(batch, "Cancelled", status="cancelled")

    res = student_client.get(f"/api/student/batches/{batch.id}/sessions/")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["batch"]["name"] == batch.name
    assert [s["topic"] for s in data["sessions"]] == ["Last week", "Live now", "Upcoming"]


def test_batch_sessions_require_enrollment(student_client, student, batch):
    res = student_client.get(f"/api/student/batches/{batch.id}/sessions/")
    assert res.status_code == 403


def test_session_detail(student_client, enrolled_student, batch):
    session = make_session(batch, "Phrasal verbs")
    res = student_client.get(f"/api/student/sessions/{session.id}/")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["topic"] == "Phrasal verbs"
    assert data["batch_name"] == batch.name


def test_session_detail_not_found(student_client, student):
    res = student_client.get("/api/student/sessions/424242/")
    assert res.status_code == 404


def test_notifications_list_and_read(student_client, student_user, admin_user):
    first = Notification.objects.create(user=student_user, type="announcement", title="A", message="a")
    Notification.objects.create(user=student_user, type="payment_due", title="B", message="b")
    Notification.objects.create(user=admin_user, type="announcement", title="Not mine", message="c")

    res = student_client.get("/api/student/notifications/")
    data = res.json()["data"]
    assert data["unread_count"] == 2
    assert {n["title"] for n in data["notifications"]} == {"A", "B"}

    res = student_client.post(f"/api/student/notifications/{first.id}/read/")
    assert res.status_code == 200
    first.refresh_from_db()
    assert first.read is True

    res = student_client.post("/api/student/notifications/read-all/")
    assert res.json()["data"]["updated"] == 1
    assert not Notification.objects.filter(user=student_user, read=False).exists()
    assert Notification.objects.filter(user=admin_user, read=False).count() == 1


def test_cannot_read_someone_elses_notification(student_client, admin_user):
    theirs = Notification.objects.create(user=admin_user, type="announcement", title="X", message="x")
    res = student_client.post(f"/api/student/notifications/{theirs.id}/read/")
    assert res.status_code == 404
