from __future__ import annotations

import pytest
from django.contrib.auth import get_user_model

from accounts.forms import SignInForm, SignUpForm
from accounts.models import Profile
from accounts.permissions import is_admin_user, user_role

from .conftest import PASSWORD

pytestmark = pytest.mark.django_db

User = get_user_model()


def test_profile_created_by_signal():
    user = User.objects.create_user(username="new@example.com", email="new@example.com", password=PASSWORD)
    assert user.profile.role == Profile.Role.USER


def test_roles(user, admin_user):
    assert user_role(user) == "USER"
    assert user_role(admin_user) == "ADMIN"
    assert is_admin_user(admin_user)
    assert not is_admin_user(user)


def test_signup_creates_user_with_name():
    form = SignUpForm(
        data={"name": "Sara", "email": "Sara@Example.com", "password": PASSWORD, "confirm_password": PASSWORD}
    )
    assert form.is_valid(), form.errors
    user = form.save()
    assert user.username == "sara@example.com"
    assert user.profile.name == "Sara"
    assert user.check_password(PASSWORD)


def test_signup_rejects_duplicate_email(user):
    form = SignUpForm(
        data={"name": "Again", "email": user.email, "password": PASSWORD, "confirm_password": PASSWORD}
    )
    assert not form.is_valid()
    assert form.has_error("email", code="user_exists")


def test_signup_rejects_password_mismatch():
    form = SignUpForm(
        data={"name": "Sara", "email": "sara@example.com", "password": PASSWORD, "confirm_password": "different1"}
    )
    assert not form.is_valid()
    assert "confirm_password" in form.errors


def test_signup_password_length_bounds():
    short = SignUpForm(data={"name": "A", "email": "a@example.com", "password": "12345", "confirm_password": "12345"})
    assert not short.is_valid()
    assert "password" in short.errors

    long_pw = "x" * 41
    too_long = SignUpForm(data={"name": "A", "email": "a@example.com", "password": long_pw, "confirm_password": long_pw})
    assert not too_long.is_valid()


def test_signin_reports_unknown_user():
    form = SignInForm(None, data={"email": "ghost@example.com", "password": PASSWORD})
    assert not form.is_valid()
    assert form.has_error("__all__", code="user_not_found")


def test_signin_reports_wrong_password(user):
    form = SignInForm(None, data={"email": user.email, "password": "wrong-pass"})
    assert not form.is_valid()
    assert form.has_error("__all__", code="incorrect_password")


def test_signin_view_user_goes_to_profile(client, user):
    response = client.post("/en/auth/signin/", {"email": user.email, "password": PASSWORD})
    assert response.status_code == 302
    assert response["Location"] == "/en/profile/"


def test_signin_view_admin_goes_to_dashboard(client, admin_user):
    response = client.post("/ar/auth/signin/", {"email": admin_user.email, "password": PASSWORD})
    assert response["Location"] == "/ar/admin/"


def test_signin_view_honors_safe_next(client, user):
    response = client.post("/en/auth/signin/", {"email": user.email, "password": PASSWORD, "next": "/en/cart/"})
    assert response["Location"] == "/en/cart/"

    client.logout()
    response = client.post(
        "/en/auth/signin/", {"email": user.email, "password": PASSWORD, "next": "https://evil.example.com/"}
    )
    assert response["Location"] == "/en/profile/"


def test_signin_view_rerenders_on_error(client):
    response = client.post("/en/auth/signin/", {"email": "ghost@example.com", "password": PASSWORD})
    assert response.status_code == 200
    assert b"No account found" in response.content


def test_signup_view_redirects_to_signin(client):
    response = client.post(
        "/en/auth/signup/",
        {"name": "Omar", "email": "omar@example.com", "password": PASSWORD, "confirm_password": PASSWORD},
    )
    assert response.status_code == 302
    assert response["Location"] == "/en/auth/signin/"
    assert User.objects.filter(username="omar@example.com").exists()


def test_signout_requires_post(user_client):
    assert user_client.get("/en/signout/").status_code == 405
    response = user_client.post("/en/signout/")
    assert response["Location"] == "/en/"
    assert user_client.get("/en/profile/")["Location"] == "/en/auth/signin/"


def test_profile_update(user_client, user):
    response = user_client.post(
        "/en/profile/",
        {
            "name": "New Name",
            "email": "renamed@example.com",
            "phone": "+201111111111",
            "street_address": "2 Nile St",
            "postal_code": "12345",
            "city": "Giza",
            "country": "Egypt",
        },
    )
    assert response.status_code == 302
    user.refresh_from_db()
    assert user.email == "renamed@example.com"
    assert user.username == "renamed@example.com"
    assert user.profile.city == "Giza"


def test_profile_rejects_bad_phone_and_postal_code(user_client):
    response = user_client.post(
        "/en/profile/",
        {
            "name": "X",
            "email": "customer@example.com",
            "phone": "0123",
            "street_address": "",
            "postal_code": "12",
            "city": "",
            "country": "",
        },
    )
    assert response.status_code == 200
    form = response.context["form"]
    assert "phone" in form.errors
    assert "postal_code" in form.errors


def test_superuser_signs_in_by_email(client, db):
    User.objects.create_superuser(username="boss", email="boss@example.com", password=PASSWORD)

    response = client.post("/en/auth/signin/", {"email": "Boss@Example.com", "password": PASSWORD})
    assert response.status_code == 302
    assert response["Location"] == "/en/admin/"


def test_profile_rejects_email_of_another_account(user_client, db):
    User.objects.create_superuser(username="boss", email="boss@example.com", password=PASSWORD)

    response = user_client.post(
        "/en/profile/",
        {
            "name": "Taken",
            "email": "boss@example.com",
            "phone": "+201111111111",
            "street_address": "2 Nile St",
            "postal_code": "12345",
            "city": "Giza",
            "country": "Egypt",
        },
    )
    assert response.status_code == 200
    assert response.context["form"].has_error("email", code="user_exists")
