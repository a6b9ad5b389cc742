import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from student.models import Student

User = get_user_model()

pytestmark = pytest.mark.django_db


def test_register_creates_student_account(api_client):
    res = api_client.post("/api/auth/register/", {
        "email": "ravi@example.com",
        "name": "Ravi Kumar",
        "password": "Str0ng!Pass2024",
        "password2": "Str0ng!Pass2024",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["data"]["access"]
    assert body["data"]["refresh"]
    assert body["data"]["user"]["role"] == "student"
    assert body["data"]["user"]["is_admin"] is False

    user = User.objects.get(email="ravi@example.com")
    assert Student.objects.filter(user=user).exists()


def test_register_password_mismatch(api_client):
    res = api_client.post("/api/auth/register/", {
        "email": "ravi@example.com",
        "name": "Ravi Kumar",
        "password": "Str0ng!Pass2024",
        "password2": "Different!Pass2024",
    })
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert "password" in body["errors"]


def test_login_returns_tokens_and_role(api_client, admin_user):
    res = api_client.post("/api/auth/login/", {"email": "admin@engconnect.com", "password": "Admin@123"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["access"]
    assert data["user"]["role"] == "admin"
    assert data["user"]["is_admin"] is True


def test_login_wrong_password(api_client, student_user):
    res = api_client.post("/api/auth/login/", {"email": "priya@example.com", "password": "nope"})
    assert res.status_code == 400
    assert "password" in res.json()["errors"]


def test_login_unknown_email(api_client, db):
    res = api_client.post("/api/auth/login/", {"email": "ghost@example.com", "password": "whatever"})
    assert res.status_code == 400
    assert "email" in res.json()["errors"]


def test_current_user_name_falls_back_to_email(api_client, db):
    user = User.objects.create_user(username="noname@example.com", email="noname@example.com", password="x")
    api_client.force_authenticate(user)

    for url in ("/api/auth/me/", "/api/user/"):
        res = api_client.get(url)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["email"] == "noname@example.com"
        assert data["name"] == "noname@example.com"
        assert data["role"] == "student"


def test_current_user_requires_auth(api_client):
    res = api_client.get("/api/user/")
    assert res.status_code == 401
    assert res.json()["success"] is False


def test_logout_blacklists_refresh_token(api_client, student_user):
    login = api_client.post("/api/auth/login/", {"email": "priya@example.com", "password": "Student@123"})
    refresh = login.json()["data"]["refresh"]

    api_client.force_authenticate(student_user)
    res = api_client.post("/api/auth/logout/", {"refresh": refresh})
    assert res.status_code == 200

    api_client.force_authenticate(None)
    res = api_client.post("/api/auth/refresh/", {"refresh": refresh})
    assert res.status_code == 401


def test_logout_with_garbage_token(api_client, student_user):
    api_client.force_authenticate(student_user)
    res = api_client.post("/api/auth/logout/", {"refresh": "not-a-token"})
    assert res.status_code == 400


def test_seed_admin_creates_then_updates(db):
    call_command("seed_admin", email="boss@engconnect.com", password="First@123")
    admin = User.objects.get(email="boss@engconnect.com")
    assert admin.role == "admin"
    assert admin.is_staff
    assert not Student.objects.filter(user=admin).exists()

    call_command("seed_admin", email="boss@engconnect.com", password="Second@123")
    admin.refresh_from_db()
    assert User.objects.filter(email="boss@engconnect.com").count() == 1
    assert admin.check_password("Second@123")


def test_cleanup_admin_recreates_account(admin_user):
    old_id = admin_user.id
    call_command("cleanup_admin", email="admin@engconnect.com", password="Fresh@123")

    admins = User.objects.filter(email="admin@engconnect.com")
    assert admins.count() == 1
    fresh = admins.get()
    assert fresh.id != old_id
    assert fresh.role == "admin"
    assert fresh.check_password("Fresh@123")


def test_update_password(student_user):
    call_command("update_password", email="priya@example.com", password="Changed@123")
    student_user.refresh_from_db()
    assert student_user.check_password("Changed@123")


def test_update_password_unknown_user(db):
    with pytest.raises(CommandError):
        call_command("update_password", email="ghost@example.com", password="x")
