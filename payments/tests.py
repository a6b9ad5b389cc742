from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from payments.models import Payment

User = get_user_model()

pytestmark = pytest.mark.django_db


@pytest.fixture
def owing_student(student):
    student.total_due = Decimal("5000.00")
    student.save()
    return student


def test_record_partial_payment(admin_client, owing_student, batch):
    res = admin_client.post("/api/admin/payments/", {
        "student": owing_student.id,
        "batch": batch.id,
        "amount": "2000.00",
        "method": "UPI",
        "description": "First instalment",
    }, format="json")
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["status"] == "completed"
    assert data["method"] == "upi"
    assert data["amount"] == 2000.0
    assert data["student_email"] == "priya@example.com"
    assert data["batch_name"] == batch.name

    owing_student.refresh_from_db()
    assert owing_student.total_paid == Decimal("2000.00")
    assert owing_student.total_due == Decimal("3000.00")
    assert owing_student.payment_status == "pending"


def test_payment_clearing_balance_marks_paid(admin_client, owing_student):
    res = admin_client.post("/api/admin/payments/", {
        "student": owing_student.id,
        "amount": "6000.00",
        "method": "cash",
        "description": "Full fee",
    }, format="json")
    assert res.status_code == 201
    assert res.json()["data"]["batch"] is None

    owing_student.refresh_from_db()
    assert owing_student.payment_status == "paid"
    assert owing_student.total_due == Decimal("0.00")
    assert owing_student.total_paid == Decimal("6000.00")


def test_record_payment_validation(admin_client, owing_student):
    res = admin_client.post("/api/admin/payments/", {
        "student": owing_student.id,
        "amount": "100.00",
        "method": "cheque",
        "description": "Unknown method",
    }, format="json")
    assert res.status_code == 400
    assert "method" in res.json()["errors"]

    res = admin_client.post("/api/admin/payments/", {
        "student": 9999,
        "amount": "100.00",
        "method": "cash",
        "description": "Nobody",
    }, format="json")
    assert res.status_code == 400

    res = admin_client.post("/api/admin/payments/", {
        "student": owing_student.id,
        "amount": "0",
        "method": "cash",
        "description": "Nothing",
    }, format="json")
    assert res.status_code == 400
    assert not Payment.objects.exists()


def test_list_payments_with_filters(admin_client, owing_student):
    other = User.objects.create_user(username="o@example.com", email="o@example.com", password="x", name="Omar")
    now = timezone.now()
    Payment.objects.create(student=owing_student, amount=Decimal("100.00"), method="card",
                           description="Old", date=now - timedelta(days=3))
    Payment.objects.create(student=owing_student, amount=Decimal("200.00"), method="card",
                           description="Failed", status="failed", date=now - timedelta(days=2))
    Payment.objects.create(student=other.student_profile, amount=Decimal("300.00"), method="cash",
                           description="Newest", date=now)

    res = admin_client.get("/api/admin/payments/")
    assert res.status_code == 200
    assert [p["description"] for p in res.json()["data"]] == ["Newest", "Failed", "Old"]

    res = admin_client.get("/api/admin/payments/", {"status": "FAILED"})
    assert [p["description"] for p in res.json()["data"]] == ["Failed"]

    res = admin_client.get("/api/admin/payments/", {"status": "all", "student": owing_student.id})
    assert [p["description"] for p in res.json()["data"]] == ["Failed", "Old"]


def test_payments_forbidden_for_students(student_client):
    res = student_client.get("/api/admin/payments/")
    assert res.status_code == 403


def test_payments_require_login(api_client):
    res = api_client.get("/api/admin/payments/")
    assert res.status_code == 401
