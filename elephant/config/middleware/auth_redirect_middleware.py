# config/middleware/auth_redirect_middleware.py
import logging

from django.conf import settings
from django.shortcuts import render, resolve_url

from backend.client import SESSION_COOKIES_KEY
from backend.exceptions import BackendAuthError

logger = logging.getLogger(__name__)


class AuthRedirectMiddleware:
    """
    Turns a backend 401 that a view did not handle itself into the
    "Authentication required" page.

    The page shows the message for ``AUTH_REDIRECT_DELAY_SECONDS`` and then
    navigates to the admin login screen (meta refresh, no JavaScript needed).
    The stale backend cookie is dropped from the session so the login page
    starts clean.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, BackendAuthError):
            return None

        logger.info("Backend rejected the admin session on %s", request.path)
        if hasattr(request, "session"):
            request.session.pop(SESSION_COOKIES_KEY, None)
        return render_auth_required(request)


def render_auth_required(request):
    context = {
        "error_message": "Authentication required. Redirecting to login...",
        "login_url": resolve_url(settings.LOGIN_URL),
        "delay_seconds": settings.AUTH_REDIRECT_DELAY_SECONDS,
    }
    return render(request, "elephant/auth_required.html", context, status=401)
