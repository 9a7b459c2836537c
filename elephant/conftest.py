# conftest.py
import io
import json
from datetime import date
from unittest import mock

import pytest
import requests
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from backend.client import SESSION_COOKIES_KEY, BackendClient
from backend.resources import Attendee, Event, TicketPurchase

ADMIN_COOKIES = {"connect.sid": "s%3Aadmin-session"}


def make_response(status=200, body=None, text=None):
    """A real ``requests.Response`` carrying a JSON ``body`` or raw ``text``."""
    response = requests.Response()
    response.status_code = status
    if body is not None:
        response._content = json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode()
    return response


def make_event(**overrides):
    data = {
        "id": 5,
        "title": "Jazz Night: Live!",
        "display_date": "March 1, 2025",
        "venue_name": "XX XX",
        "venue_address": "Makati",
        "event_time": "10PM",
        "description": "A night",
        "email_template_content": "See you there",
        "ticket_price_regular": "500",
        "ticket_price_bundle": "450",
        "bundle_size": 3,
        "max_tickets": 100,
        "sold_tickets": 10,
        "ticket_deadline": "2099-01-01",
        "is_active": True,
        "inactive_message": None,
        "start_date": "2099-01-02",
        "walk_in_price": "600",
        "walk_in_cash_count": 0,
        "walk_in_gcash_count": 0,
        "poster_image_url": None,
    }
    data.update(overrides)
    return Event.model_validate(data)


def make_ticket(**overrides):
    data = {
        "id": 1,
        "event_id": 5,
        "buyer_name": "Ana",
        "phone": "0917",
        "email": "ana@example.com",
        "payslip_url": None,
        "reference_number": "REF-1",
        "total_price": "1000",
        "created_at": "2025-01-01T10:00:00Z",
        "attendees": [{"name": "Ana"}, {"name": "Ben"}],
    }
    data.update(overrides)
    return TicketPurchase.model_validate(data)


def make_attendee(id, name, group, checked_in=False):
    return Attendee(id=id, name=name, group_identifier=group, checked_in=checked_in)


def make_payslip(name="slip.png"):
    """A real 1x1 PNG upload; image fields run it through Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", (1, 1), "white").save(buffer, "PNG")
    return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")


@pytest.fixture
def logged_in_client(client):
    """Test client whose session holds a backend admin cookie."""
    session = client.session
    session[SESSION_COOKIES_KEY] = dict(ADMIN_COOKIES)
    session.save()
    return client


@pytest.fixture
def backend():
    """The client every admin view gets from ``BackendClient.for_request``."""
    fake = mock.MagicMock(spec=BackendClient)
    with mock.patch.object(BackendClient, "for_request", return_value=fake):
        yield fake


@pytest.fixture
def today():
    return date(2025, 3, 1)
