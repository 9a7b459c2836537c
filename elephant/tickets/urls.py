from django.urls import path

from . import views

app_name = "tickets"

urlpatterns = [
    path(
        "events/<int:event_id>/tickets/",
        views.ticket_dashboard,
        name="dashboard",
    ),
    path(
        "events/<int:event_id>/tickets/<int:ticket_id>/edit/",
        views.edit_ticket,
        name="edit_ticket",
    ),
    path(
        "events/<int:event_id>/tickets/<int:ticket_id>/delete/",
        views.delete_ticket,
        name="delete_ticket",
    ),
]
