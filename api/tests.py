import pytest
from django.contrib.auth.models import AnonymousUser

from api.permissions import is_admin_user
from api.utils import normalize_choice


def test_normalize_choice():
    assert normalize_choice(" Completed ") == "completed"
    assert normalize_choice("ALL") is None
    assert normalize_choice("") is None
    assert normalize_choice(None) is None


@pytest.mark.django_db
def test_is_admin_user(admin_user, student_user, django_user_model):
    superuser = django_user_model.objects.create_superuser(
        username="root@engconnect.com", email="root@engconnect.com", password="x"
    )
    assert is_admin_user(admin_user)
    assert is_admin_user(superuser)
    assert not is_admin_user(student_user)
    assert not is_admin_user(AnonymousUser())


@pytest.mark.django_db
def test_api_root_is_public(api_client):
    res = api_client.get("/api/")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Welcome to EngConnect API"
    assert body["data"]["endpoints"]["admin"]["payments"] == "/api/admin/payments/"
