"""
URL configuration for the Elephant Party site.

Public pages live at the root; everything under ``admin/`` is the event
console and requires a backend admin session.
"""

from django.urls import include, path

from .health import health_check

urlpatterns = [
    path("health/", health_check, name="health_check"),
    path("admin/", include("accounts.urls")),
    path("admin/", include("events.urls")),
    path("admin/", include("tickets.urls")),
    path("", include("elephant.urls")),
]

handler404 = "elephant.views.page_not_found_view"
