from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase
from django.urls import reverse

from accounts.decorators import admin_login_required
from backend.client import SESSION_COOKIES_KEY


@admin_login_required
def protected(request):
    return HttpResponse("secret")


class AdminLoginRequiredTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def _request(self, path, cookies=None):
        request = self.factory.get(path)
        request.session = {}
        if cookies:
            request.session[SESSION_COOKIES_KEY] = cookies
        return request

    def test_redirects_to_login_with_next(self):
        response = protected(self._request("/admin/events/5/?tab=door"))
        self.assertEqual(response.status_code, 302)
        self.assertEqual(
            response.url,
            reverse("accounts:login") + "?next=%2Fadmin%2Fevents%2F5%2F%3Ftab%3Ddoor",
        )

    def test_lets_admin_session_through(self):
        response = protected(self._request("/admin/", cookies={"connect.sid": "x"}))
        self.assertEqual(response.content, b"secret")

    def test_protected_views_redirect_anonymous_client(self):
        response = self.client.get(reverse("events:dashboard"))
        self.assertRedirects(
            response,
            reverse("accounts:login") + "?next=%2Fadmin%2F",
            fetch_redirect_response=False,
        )
