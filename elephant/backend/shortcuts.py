import logging

from django.shortcuts import render

from .exceptions import BackendAuthError, BackendNotFound

logger = logging.getLogger(__name__)


def load_error_response(
    request, exc, back_url, back_label="Back to Dashboard", not_found="Event not found"
):
    """
    Page-level error state for a view whose initial fetch failed.

    A 401 is re-raised for AuthRedirectMiddleware. A 404 gets its own
    message; anything else is reported as a generic load failure.
    """
    if isinstance(exc, BackendAuthError):
        raise exc

    if isinstance(exc, BackendNotFound):
        message, status = not_found, 404
    else:
        logger.error("Page load failed on %s: %s", request.path, exc)
        message, status = "Failed to load data. Please try again later.", 502

    return render(
        request,
        "elephant/load_error.html",
        {"error_message": message, "back_url": back_url, "back_label": back_label},
        status=status,
    )
