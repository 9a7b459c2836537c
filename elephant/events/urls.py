from django.urls import path

from . import views

app_name = "events"
urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("events/new/", views.new_event, name="new_event"),
    path("events/<int:event_id>/", views.event_detail, name="event_detail"),
    path("events/<int:event_id>/activate/", views.toggle_active, name="toggle_active"),
    path("events/<int:event_id>/delete/", views.delete_event, name="delete_event"),
    path("events/<int:event_id>/door/", views.door, name="door"),
    path(
        "events/<int:event_id>/door/check-in/<int:attendee_id>/",
        views.check_in,
        name="check_in",
    ),
    path(
        "events/<int:event_id>/door/walk-ins/<str:action>/",
        views.walk_in,
        name="walk_in",
    ),
    path("events/<int:event_id>/downloads/", views.downloads, name="downloads"),
    path(
        "events/<int:event_id>/downloads/<str:report>/",
        views.download_report,
        name="download_report",
    ),
]
