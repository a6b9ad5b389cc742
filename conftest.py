from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from courses.models import Batch, BatchEnrollment

User = get_user_model()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username="admin@engconnect.com",
        email="admin@engconnect.com",
        password="Admin@123",
        name="Admin",
        role="admin",
        is_staff=True,
    )


@pytest.fixture
def student_user(db):
    """A student account; its Student profile is created by the post_save signal."""
    return User.objects.create_user(
        username="priya@example.com",
        email="priya@example.com",
        password="Student@123",
        name="Priya Sharma",
        role="student",
    )


@pytest.fixture
def student(student_user):
    return student_user.student_profile


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(admin_user)
    return client


@pytest.fixture
def student_client(student_user):
    client = APIClient()
    client.force_authenticate(student_user)
    return client


@pytest.fixture
def batch(db):
    now = timezone.now()
    return Batch.objects.create(
        name="Spoken English - Morning",
        level="beginner",
        schedule_days=["Monday", "Wednesday", "Friday"],
        schedule_time="10:00 AM",
        capacity=10,
        instructor_name="Anita Rao",
        start_date=now - timedelta(days=7),
        end_date=now + timedelta(days=60),
        description="Everyday conversation practice",
        price=Decimal("4999.00"),
    )


@pytest.fixture
def enrolled_student(student, batch):
    BatchEnrollment.objects.create(student=student, batch=batch)
    return student
