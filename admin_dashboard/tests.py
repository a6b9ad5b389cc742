from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from classroom.models import ClassSession, Attendance
from courses.models import Batch
from payments.models import Payment

User = get_user_model()

pytestmark = pytest.mark.django_db


def make_student(email, payment_status="pending", total_due="0.00"):
    user = User.objects.create_user(username=email, email=email, password="x", name=email.split("@")[0])
    student = user.student_profile
    student.payment_status = payment_status
    student.total_due = Decimal(total_due)
    student.save()
    return student


def test_admin_dashboard_statistics(admin_client, batch):
    now = timezone.now()
    a = make_student("a@example.com", "pending", "1000.00")
    make_student("b@example.com", "pending", "500.00")
    make_student("c@example.com", "overdue", "750.00")

    Batch.objects.create(
        name="Finished", level="beginner", schedule_days=["Monday"], schedule_time="9:00 AM",
        capacity=5, instructor_name="X", start_date=now - timedelta(days=120), end_date=now - timedelta(days=30),
    )

    ClassSession.objects.create(batch=batch, topic="Soon", instructor_name="Anita Rao",
                                start_time=now + timedelta(minutes=5), end_time=now + timedelta(minutes=65))
    ClassSession.objects.create(batch=batch, topic="Next week", instructor_name="Anita Rao",
                                start_time=now + timedelta(days=7), end_time=now + timedelta(days=7, hours=1))
    ClassSession.objects.create(batch=batch, topic="Cancelled", instructor_name="Anita Rao", status="cancelled",
                                start_time=now + timedelta(days=1), end_time=now + timedelta(days=1, hours=1))

    Payment.objects.create(student=a, amount=Decimal("1200.00"), method="upi", description="This month", date=now)
    Payment.objects.create(student=a, amount=Decimal("999.00"), method="upi", description="Failed",
                           status="failed", date=now)
    Payment.objects.create(student=a, amount=Decimal("5000.00"), method="cash", description="Last year",
                           date=now - timedelta(days=400))

    res = admin_client.get("/api/admin/dashboard/")
    assert res.status_code == 200
    data = res.json()["data"]

    assert data["total_students"] == 3
    assert data["active_batches"] == 1
    assert data["monthly_revenue"] == 1200.0
    assert data["payment_summary"] == {"collected": 1200.0, "pending": 1500.0, "overdue": 750.0}
    assert [c["topic"] for c in data["upcoming_classes"]] == ["Soon", "Next week"]
    assert len(data["recent_students"]) == 3
    assert data["recent_students"][0]["email"] == "c@example.com"


def test_admin_dashboard_empty(admin_client):
    data = admin_client.get("/api/admin/dashboard/").json()["data"]
    assert data["total_students"] == 0
    assert data["todays_classes"] == 0
    assert data["monthly_revenue"] == 0
    assert data["upcoming_classes"] == []


def test_admin_dashboard_forbidden_for_students(student_client):
    res = student_client.get("/api/admin/dashboard/")
    assert res.status_code == 403


def test_student_dashboard(student_client, enrolled_student, batch):
    now = timezone.now()
    done = ClassSession.objects.create(batch=batch, topic="Done", instructor_name="Anita Rao", status="completed",
                                       start_time=now - timedelta(days=2), end_time=now - timedelta(days=2, hours=-1))
    for i in range(6):
        ClassSession.objects.create(batch=batch, topic=f"Upcoming {i}", instructor_name="Anita Rao",
                                    start_time=now + timedelta(days=i + 1),
                                    end_time=now + timedelta(days=i + 1, hours=1))
    Attendance.objects.create(session=done, student=enrolled_student, status="present")
    enrolled_student.recalculate_attendance_rate()
    Payment.objects.create(student=enrolled_student, amount=Decimal("500.00"), method="card", description="Fee")

    res = student_client.get("/api/student/dashboard/")
    assert res.status_code == 200
    data = res.json()["data"]

    assert data["profile"]["email"] == "priya@example.com"
    assert data["stats"]["attendance_rate"] == 100.0
    assert data["stats"]["payment_status"] == "pending"
    assert [b["name"] for b in data["enrolled_batches"]] == [batch.name]
    assert [c["topic"] for c in data["upcoming_classes"]] == [f"Upcoming {i}" for i in range(5)]
    assert data["recent_payments"][0]["amount"] == 500.0
    assert data["recent_attendances"][0]["topic"] == "Done"


def test_student_dashboard_without_profile(admin_client):
    res = admin_client.get("/api/student/dashboard/")
    assert res.status_code == 404
    assert res.json()["success"] is False
