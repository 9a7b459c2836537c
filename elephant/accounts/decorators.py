from functools import wraps
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth import REDIRECT_FIELD_NAME
from django.shortcuts import redirect, resolve_url

from backend.client import SESSION_COOKIES_KEY


def admin_login_required(
    view_func=None,
    redirect_field_name=REDIRECT_FIELD_NAME,
    login_url=None,
):
    """
    Decorator for admin views: the session must hold a backend admin cookie,
    otherwise redirect to the log-in page with a ``next`` parameter.

    Holding a cookie does not mean it is still valid; an expired one comes
    back from the backend as a 401 and is handled by AuthRedirectMiddleware.
    """

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            if request.session.get(SESSION_COOKIES_KEY):
                return view_func(request, *args, **kwargs)

            resolved_login_url = resolve_url(login_url or settings.LOGIN_URL)
            params = urlencode({redirect_field_name: request.get_full_path()})
            return redirect(f"{resolved_login_url}?{params}")

        return _wrapped_view

    if view_func:
        return decorator(view_func)
    return decorator
