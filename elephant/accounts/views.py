# accounts/views.py
import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from backend.client import BackendClient, store_session_cookies
from backend.exceptions import BackendAuthError, BackendError, BackendUnavailable

from .forms import LoginForm

logger = logging.getLogger(__name__)


def _success_url(request):
    next_url = request.POST.get("next") or request.GET.get("next")
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}
    ):
        return next_url
    return reverse("events:dashboard")


def login_view(request):
    """
    Log in against the backend. The backend answers with a session cookie,
    which is kept in this site's session and replayed on admin calls.
    """
    error = None
    if request.method == "POST":
        form = LoginForm(request.POST)
        if form.is_valid():
            client = BackendClient()
            try:
                client.login(
                    form.cleaned_data["username"], form.cleaned_data["password"]
                )
            except BackendAuthError as exc:
                error = exc.message or "Login failed"
            except BackendUnavailable:
                error = "An unexpected error occurred."
            except BackendError as exc:
                error = exc.message or "Login failed"
            else:
                request.session.cycle_key()
                store_session_cookies(request, client.cookies)
                return redirect(_success_url(request))
    else:
        form = LoginForm()

    return render(
        request,
        "accounts/login.html",
        {"form": form, "error": error, "next": request.GET.get("next", "")},
    )


@require_POST
def logout_view(request):
    client = BackendClient.for_request(request)
    try:
        client.logout()
    except BackendError as exc:
        # the local session is dropped regardless
        logger.warning("Backend logout failed: %s", exc)
    request.session.flush()
    messages.info(request, "You have been logged out.")
    return redirect("accounts:login")
