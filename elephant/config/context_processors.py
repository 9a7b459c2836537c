from django.conf import settings
from django.urls import reverse

from backend.client import SESSION_COOKIES_KEY


def site_navigation(request):
    """The header's nav items; ``external`` ones open in a new tab."""
    return {
        "NAV_ITEMS": [
            {"name": "EVENTS", "url": reverse("elephant:index")},
            {"name": "PODCAST", "url": settings.PODCAST_URL, "external": True},
            {"name": "MERCH", "url": reverse("elephant:merch")},
            {"name": "FUNDRAISER", "url": reverse("elephant:fundraiser")},
            {"name": "FEATURES", "url": reverse("elephant:features")},
            {"name": "CONTACT", "url": reverse("elephant:contact")},
            {"name": "ABOUT", "url": reverse("elephant:about")},
        ]
    }


def admin_session(request):
    session = getattr(request, "session", None)
    return {"IS_ADMIN": bool(session and session.get(SESSION_COOKIES_KEY))}
