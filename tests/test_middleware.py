from __future__ import annotations

import pytest

pytestmark = pytest.mark.django_db


def test_root_redirects_to_negotiated_locale(client):
    response = client.get("/", HTTP_ACCEPT_LANGUAGE="en-US,en;q=0.9")
    assert response.status_code == 302
    assert response["Location"] == "/en/"


def test_missing_locale_defaults_to_arabic_and_keeps_query(client):
    response = client.get("/menu/?page=2")
    assert response.status_code == 302
    assert response["Location"] == "/ar/menu/?page=2"


def test_localized_page_renders_with_direction(client):
    response = client.get("/ar/")
    assert response.status_code == 200
    assert b'dir="rtl"' in response.content

    response = client.get("/en/about/")
    assert response.status_code == 200
    assert b'dir="ltr"' in response.content


def test_pass_through_attaches_locale_and_x_url(client):
    response = client.get("/en/menu/?x=1")
    request = response.wsgi_request
    assert request.locale == "en"
    assert request.META["HTTP_X_URL"] == "http://testserver/en/menu/?x=1"


def test_anonymous_profile_redirects_to_signin(client):
    response = client.get("/en/profile/")
    assert response.status_code == 302
    assert response["Location"] == "/en/auth/signin/"


def test_anonymous_admin_redirects_to_signin(client):
    response = client.get("/ar/admin/menu-items/")
    assert response["Location"] == "/ar/auth/signin/"


def test_signed_in_user_is_bounced_from_auth_pages(user_client):
    response = user_client.get("/en/auth/signin/")
    assert response["Location"] == "/en/profile/"


def test_signed_in_admin_is_bounced_to_admin(admin_client):
    response = admin_client.get("/en/auth/signup/")
    assert response["Location"] == "/en/admin/"


def test_user_cannot_reach_admin(user_client):
    response = user_client.get("/en/admin/")
    assert response["Location"] == "/en/profile/"


def test_user_reaches_profile(user_client):
    assert user_client.get("/en/profile/").status_code == 200


def test_superuser_counts_as_admin(client, django_user_model):
    su = django_user_model.objects.create_superuser(username="root@example.com", email="root@example.com", password="x" * 8)
    client.force_login(su)
    assert client.get("/en/admin/").status_code == 200


def test_excluded_paths_skip_the_gateway(client):
    response = client.get("/robots.txt")
    assert response.status_code == 200
    assert b"Disallow: /ar/admin/" in response.content

    response = client.get("/sitemap.xml")
    assert response.status_code == 200
    assert b"/en/menu/" in response.content


def test_request_id_header(client):
    response = client.get("/en/", HTTP_X_REQUEST_ID="abc123")
    assert response["X-Request-ID"] == "abc123"


def test_security_headers_present(client):
    response = client.get("/en/")
    assert response["X-Content-Type-Options"] == "nosniff"


def test_unknown_localized_path_renders_404(client):
    response = client.get("/en/nope/")
    assert response.status_code == 404
