from unittest import mock

import pytest
from django.urls import reverse

from backend.client import SESSION_COOKIES_KEY
from backend.exceptions import BackendAuthError, BackendError, BackendUnavailable

APP = "accounts"


@pytest.fixture
def login_backend():
    with mock.patch(f"{APP}.views.BackendClient") as fake_class:
        fake = fake_class.return_value
        fake.cookies = {"connect.sid": "fresh"}
        yield fake


def _post_login(client, **extra):
    data = {"username": "admin", "password": "secret"}
    data.update(extra)
    return client.post(reverse(f"{APP}:login"), data)


def test_login_page_renders(client):
    res = client.get(reverse(f"{APP}:login"))
    assert res.status_code == 200
    assert "Admin Login" in res.content.decode()


def test_login_success_stores_backend_cookie_and_redirects(client, login_backend):
    res = _post_login(client)

    assert res.status_code == 302
    assert res.url == reverse("events:dashboard")
    login_backend.login.assert_called_once_with("admin", "secret")
    assert client.session[SESSION_COOKIES_KEY] == {"connect.sid": "fresh"}


def test_login_follows_safe_next(client, login_backend):
    res = _post_login(client, next="/admin/events/5/door/")
    assert res.url == "/admin/events/5/door/"


def test_login_ignores_offsite_next(client, login_backend):
    res = _post_login(client, next="https://evil.example.com/")
    assert res.url == reverse("events:dashboard")


def test_login_rejected_shows_backend_message(client, login_backend):
    login_backend.login.side_effect = BackendAuthError("Invalid credentials", status=401)

    res = _post_login(client)

    assert res.status_code == 200
    assert res.context["error"] == "Invalid credentials"
    assert SESSION_COOKIES_KEY not in client.session


def test_login_rejected_without_message_says_login_failed(client, login_backend):
    login_backend.login.side_effect = BackendError("", status=400)
    res = _post_login(client)
    assert res.context["error"] == "Login failed"


def test_login_backend_down(client, login_backend):
    login_backend.login.side_effect = BackendUnavailable("refused")
    res = _post_login(client)
    assert res.context["error"] == "An unexpected error occurred."


def test_login_requires_both_fields(client, login_backend):
    res = client.post(reverse(f"{APP}:login"), {"username": "admin"})
    assert res.status_code == 200
    assert "password" in res.context["form"].errors
    login_backend.login.assert_not_called()


def test_logout_flushes_session_even_if_backend_fails(logged_in_client):
    with mock.patch(f"{APP}.views.BackendClient") as fake_class:
        fake_class.for_request.return_value.logout.side_effect = BackendError("boom")
        res = logged_in_client.post(reverse(f"{APP}:logout"))

    assert res.status_code == 302
    assert res.url == reverse(f"{APP}:login")
    assert SESSION_COOKIES_KEY not in logged_in_client.session


def test_logout_requires_post(logged_in_client):
    res = logged_in_client.get(reverse(f"{APP}:logout"))
    assert res.status_code == 405
