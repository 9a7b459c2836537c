from django.urls import path

from . import views

app_name = "elephant"
urlpatterns = [
    path("", views.index, name="index"),
    path("about/", views.about, name="about"),
    path("contact/", views.contact, name="contact"),
    path("merch/", views.merch, name="merch"),
    path("features/", views.features, name="features"),
    path("fundraiser/", views.fundraiser, name="fundraiser"),
    path("events/<int:event_id>/tickets/", views.purchase, name="purchase"),
    path(
        "events/<int:event_id>/tickets/done/",
        views.purchase_complete,
        name="purchase_complete",
    ),
]
