from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from classroom.models import ClassSession
from courses.models import Batch, BatchEnrollment
from student.models import Notification

User = get_user_model()

pytestmark = pytest.mark.django_db


def make_batch(name, level="beginner", capacity=10, days_from_now=7):
    now = timezone.now()
    return Batch.objects.create(
        name=name,
        level=level,
        schedule_days=["Tuesday", "Thursday"],
        schedule_time="6:00 PM",
        capacity=capacity,
        instructor_name="Meera Iyer",
        start_date=now + timedelta(days=days_from_now),
        end_date=now + timedelta(days=days_from_now + 90),
    )


# ---------------------------------------------------------------------------
# Public catalog
# ---------------------------------------------------------------------------

def test_catalog_is_public_and_paginated(api_client, batch):
    res = api_client.get("/api/courses/")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["pagination"]["total"] == 1
    item = body["data"][0]
    assert item["name"] == batch.name
    assert item["enrolled_count"] == 0
    assert item["seats_left"] == 10


def test_catalog_search_and_level_filter(api_client, db):
    make_batch("Business English", level="advanced")
    make_batch("Grammar Basics", level="beginner")
    make_batch("Business Writing", level="intermediate")

    res = api_client.get("/api/courses/", {"q": "business"})
    assert {b["name"] for b in res.json()["data"]} == {"Business English", "Business Writing"}

    res = api_client.get("/api/courses/", {"level": "ADVANCED"})
    assert [b["name"] for b in res.json()["data"]] == ["Business English"]

    res = api_client.get("/api/courses/", {"level": "all"})
    assert len(res.json()["data"]) == 3


def test_course_detail_reports_enrollment(student_client, enrolled_student, batch):
    res = student_client.get(f"/api/courses/{batch.id}/")
    assert res.status_code == 200
    assert res.json()["data"]["is_enrolled"] is True
    assert res.json()["data"]["enrolled_count"] == 1


def test_course_detail_not_found(api_client, db):
    res = api_client.get("/api/courses/9999/")
    assert res.status_code == 404
    assert res.json()["message"] == "Resource not found."


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------

def test_enroll_creates_enrollment_and_notification(student_client, student_user, batch):
    res = student_client.post(f"/api/courses/{batch.id}/enroll/")
    assert res.status_code == 201
    assert res.json()["data"]["redirect_url"] == "/student"

    student = student_user.student_profile
    assert BatchEnrollment.objects.filter(student=student, batch=batch).exists()

    notification = Notification.objects.get(user=student_user)
    assert notification.type == "announcement"
    assert notification.title == "Enrollment Successful"
    assert notification.action_url == f"/student/classroom/{batch.id}"
    assert notification.read is False


def test_enroll_creates_missing_student_profile(api_client, db, batch):
    user = User.objects.create_user(username="guest@example.com", email="guest@example.com", password="x")
    user.student_profile.delete()
    user = User.objects.get(pk=user.pk)
    api_client.force_authenticate(user)

    res = api_client.post(f"/api/courses/{batch.id}/enroll/")
    assert res.status_code == 201
    assert BatchEnrollment.objects.filter(student__user=user, batch=batch).exists()


def test_enroll_twice_is_rejected(student_client, enrolled_student, batch):
    res = student_client.post(f"/api/courses/{batch.id}/enroll/")
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert BatchEnrollment.objects.filter(batch=batch).count() == 1


def test_enroll_full_batch_is_rejected(student_client, db):
    full = make_batch("Tiny Batch", capacity=1)
    other = User.objects.create_user(username="a@example.com", email="a@example.com", password="x")
    BatchEnrollment.objects.create(student=other.student_profile, batch=full)

    res = student_client.post(f"/api/courses/{full.id}/enroll/")
    assert res.status_code == 400
    assert BatchEnrollment.objects.filter(batch=full).count() == 1


def test_enroll_requires_login(api_client, batch):
    res = api_client.post(f"/api/courses/{batch.id}/enroll/")
    assert res.status_code == 401


# ---------------------------------------------------------------------------
# Admin batches
# ---------------------------------------------------------------------------

def test_admin_batch_crud(admin_client, db):
    payload = {
        "name": "IELTS Prep",
        "level": "Advanced",
        "schedule_days": ["Saturday", "Sunday"],
        "schedule_time": "9:00 AM",
        "capacity": 15,
        "instructor_name": "John Mathew",
        "start_date": "2026-11-01T09:00:00Z",
        "end_date": "2027-01-31T09:00:00Z",
    }
    res = admin_client.post("/api/admin/batches/", payload, format="json")
    assert res.status_code == 201
    batch_id = res.json()["data"]["id"]
    assert res.json()["data"]["level"] == "advanced"

    res = admin_client.patch(f"/api/admin/batches/{batch_id}/", {"capacity": 20}, format="json")
    assert res.status_code == 200
    assert res.json()["data"]["capacity"] == 20

    res = admin_client.put(f"/api/admin/batches/{batch_id}/", {"name": "IELTS Intensive"}, format="json")
    assert res.status_code == 200
    assert Batch.objects.get(pk=batch_id).name == "IELTS Intensive"

    res = admin_client.get("/api/admin/batches/")
    assert len(res.json()["data"]) == 1

    res = admin_client.delete(f"/api/admin/batches/{batch_id}/")
    assert res.status_code == 200
    assert not Batch.objects.filter(pk=batch_id).exists()


def test_admin_batch_rejects_end_before_start(admin_client, db):
    res = admin_client.post("/api/admin/batches/", {
        "name": "Backwards",
        "level": "beginner",
        "schedule_days": ["Monday"],
        "schedule_time": "9:00 AM",
        "capacity": 5,
        "instructor_name": "X",
        "start_date": "2026-12-01T09:00:00Z",
        "end_date": "2026-11-01T09:00:00Z",
    }, format="json")
    assert res.status_code == 400
    assert "end_date" in res.json()["errors"]


def test_admin_batch_lists_students_and_upcoming_sessions(admin_client, enrolled_student, batch):
    now = timezone.now()
    ClassSession.objects.create(
        batch=batch, topic="Past", instructor_name="Anita Rao",
        start_time=now - timedelta(days=1), end_time=now - timedelta(days=1) + timedelta(hours=1),
    )
    ClassSession.objects.create(
        batch=batch, topic="Next", instructor_name="Anita Rao",
        start_time=now + timedelta(days=1), end_time=now + timedelta(days=1, hours=1),
    )

    res = admin_client.get(f"/api/admin/batches/{batch.id}/")
    data = res.json()["data"]
    assert data["enrolled_count"] == 1
    assert data["students"][0]["email"] == "priya@example.com"
    assert [s["topic"] for s in data["upcoming_sessions"]] == ["Next"]


def test_deleting_batch_cascades(admin_client, enrolled_student, batch):
    ClassSession.objects.create(
        batch=batch, topic="Intro", instructor_name="Anita Rao",
        start_time=timezone.now(), end_time=timezone.now() + timedelta(hours=1),
    )
    admin_client.delete(f"/api/admin/batches/{batch.id}/")
    assert not BatchEnrollment.objects.exists()
    assert not ClassSession.objects.exists()


def test_admin_batches_forbidden_for_students(student_client, db):
    res = student_client.get("/api/admin/batches/")
    assert res.status_code == 403
