"""
Thin wrapper around the ticketing backend's REST API.

Every page of this site gets its state from here. A request is issued once:
there are no retries, no backoff and no caching. Failures are logged and
raised as one of the ``backend.exceptions`` classes so a view can turn them
into page state (or let ``AuthRedirectMiddleware`` handle a 401).

The backend authenticates admins with a session cookie. The cookie jar the
backend hands out on login is kept in the Django session under
``SESSION_COOKIES_KEY`` and replayed on every admin call.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional

import requests
from django.conf import settings

from .exceptions import (
    BackendAuthError,
    BackendError,
    BackendNotFound,
    BackendUnavailable,
)
from .resources import Attendee, Event, PageContent, TicketPurchase, WalkInCount

logger = logging.getLogger(__name__)

SESSION_COOKIES_KEY = "backend_cookies"

PAYMENT_TYPES = ("cash", "gcash")

# Nullable numeric event fields; a blank value is sent as the string "null"
# in multipart bodies so the backend clears them.
NULLABLE_EVENT_FIELDS = ("ticket_price_bundle", "bundle_size")


def _form_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _json_value(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _upload(uploaded_file):
    """(name, bytes, content type) tuple for requests' ``files=``."""
    uploaded_file.seek(0)
    return (
        uploaded_file.name,
        uploaded_file.read(),
        getattr(uploaded_file, "content_type", None) or "application/octet-stream",
    )


def error_message(response) -> tuple:
    """
    Pull a human message out of an error response.

    The backend answers ``{"error": {"message": ...}}`` for handled errors,
    ``{"message": ...}`` from some middleware, and plain text from the proxy.
    Returns ``(message, payload)``.
    """
    fallback = f"Server returned {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return (text or fallback), text

    message = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            message = error.get("message")
        elif isinstance(error, str):
            message = error
        message = message or payload.get("message")
    return (message or fallback), payload


class BackendClient:
    def __init__(self, base_url=None, cookies=None, timeout=None):
        self.base_url = (base_url or settings.BACKEND_API_URL).rstrip("/")
        self.timeout = timeout or settings.BACKEND_TIMEOUT_SECONDS
        self.session = requests.Session()
        if cookies:
            self.session.cookies.update(cookies)

    @classmethod
    def for_request(cls, request):
        """A client carrying the admin cookies held in this Django session."""
        return cls(cookies=request.session.get(SESSION_COOKIES_KEY) or {})

    @property
    def cookies(self) -> dict:
        return self.session.cookies.get_dict()

    # --- transport ----------------------------------------------------------

    def request(self, method, path, *, json=None, data=None, files=None, accept=None):
        url = f"{self.base_url}{path}"
        headers = {"Accept": accept} if accept else {}
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                data=data,
                files=files,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Backend request %s %s failed: %s", method, path, exc)
            raise BackendUnavailable(f"Could not reach the backend: {exc}") from exc

        if response.ok:
            return response

        status = response.status_code
        message, payload = error_message(response)
        logger.warning("Backend %s %s returned %s: %s", method, path, status, message)

        if status == 401:
            raise BackendAuthError(
                message or "Authentication failed", status=status, payload=payload
            )
        if status == 404:
            raise BackendNotFound(message, status=status, payload=payload)
        raise BackendError(message, status=status, payload=payload)

    def _json(self, method, path, **kwargs):
        response = self.request(method, path, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Backend %s %s sent a non-JSON body", method, path)
            raise BackendUnavailable(
                "The backend sent an unreadable response.", status=response.status_code
            ) from exc

    # --- auth ---------------------------------------------------------------

    def login(self, username: str, password: str) -> dict:
        """Log in; the session cookie the backend sets ends up in ``cookies``."""
        data = self._json(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        if isinstance(data, dict) and data.get("success") is False:
            message, payload = "Login failed", data
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                message = error["message"]
            raise BackendAuthError(message, status=200, payload=payload)
        return data or {}

    def logout(self) -> None:
        try:
            self.request("POST", "/auth/logout")
        finally:
            self.session.cookies.clear()

    # --- public -------------------------------------------------------------

    def get_public_page(self, name: str) -> PageContent:
        return PageContent.model_validate(
            self._json("GET", f"/public/pages/{name}") or {}
        )

    def get_public_events(self) -> List[Event]:
        events = self._json("GET", "/public/events") or []
        return [Event.model_validate(e) for e in events]

    def get_public_event(self, event_id) -> Event:
        return Event.model_validate(self._json("GET", f"/public/events/{event_id}"))

    def purchase_tickets(
        self,
        event_id,
        *,
        quantity: int,
        buyer_name: str,
        phone: str,
        email: str,
        reference_number: str,
        attendees: Iterable[str],
        payslip,
    ) -> TicketPurchase:
        data = {
            "quantity": str(quantity),
            "buyer_name": buyer_name,
            "phone": phone,
            "email": email,
            "reference_number": reference_number,
        }
        data.update(attendee_fields(attendees))
        created = self._json(
            "POST",
            f"/public/events/{event_id}/purchase",
            data=data,
            files={"payslip": _upload(payslip)},
        )
        return TicketPurchase.model_validate(created)

    # --- admin: events ------------------------------------------------------

    def get_events(self) -> List[Event]:
        events = self._json("GET", "/admin/events") or []
        return [Event.model_validate(e) for e in events]

    def get_event(self, event_id) -> Event:
        return Event.model_validate(self._json("GET", f"/admin/events/{event_id}"))

    def create_event(self, data: dict, poster=None) -> Event:
        return Event.model_validate(
            self._send_event("POST", "/admin/events", data, poster)
        )

    def update_event(self, event_id, data: dict, poster=None) -> Event:
        editable = {
            k: v for k, v in data.items() if k not in Event.READ_ONLY_FIELDS
        }
        return Event.model_validate(
            self._send_event("PATCH", f"/admin/events/{event_id}", editable, poster)
        )

    def _send_event(self, method, path, data, poster):
        if poster is None:
            body = {k: _json_value(v) for k, v in data.items()}
            return self._json(method, path, json=body)

        form = {}
        for key, value in data.items():
            if value is None or value == "":
                if key in NULLABLE_EVENT_FIELDS:
                    form[key] = "null"
                continue
            form[key] = _form_value(value)
        return self._json(method, path, data=form, files={"poster": _upload(poster)})

    def delete_event(self, event_id) -> None:
        self.request("DELETE", f"/admin/events/{event_id}")

    # --- admin: door --------------------------------------------------------

    def get_event_attendees(self, event_id) -> List[Attendee]:
        return [
            Attendee.model_validate(a)
            for a in self._json("GET", f"/admin/events/{event_id}/attendees") or []
        ]

    def toggle_attendee_check_in(self, attendee_id) -> Attendee:
        return Attendee.model_validate(
            self._json("PATCH", f"/admin/attendees/{attendee_id}/check-in")
        )

    def get_walk_in_counts(self, event_id) -> WalkInCount:
        return WalkInCount.from_api(
            self._json("GET", f"/admin/events/{event_id}/walk-ins") or {}
        )

    def increment_walk_in(self, event_id, payment_type: str) -> dict:
        return self._walk_in(event_id, "increment", payment_type)

    def decrement_walk_in(self, event_id, payment_type: str) -> dict:
        return self._walk_in(event_id, "decrement", payment_type)

    def _walk_in(self, event_id, action, payment_type):
        if payment_type not in PAYMENT_TYPES:
            raise ValueError(f"Unknown payment type: {payment_type!r}")
        return (
            self._json(
                "POST",
                f"/admin/events/{event_id}/walk-ins/{action}",
                json={"payment_type": payment_type},
            )
            or {}
        )

    # --- admin: reports -----------------------------------------------------

    def get_report_pdf(self, event_id, report: str) -> bytes:
        response = self.request(
            "GET", f"/admin/events/{event_id}/{report}", accept="application/pdf"
        )
        return response.content

    # --- admin: tickets -----------------------------------------------------

    def get_tickets(self) -> List[TicketPurchase]:
        return [
            TicketPurchase.model_validate(t)
            for t in self._json("GET", "/admin/tickets") or []
        ]

    def create_ticket(self, event_id, fields: dict, attendees, payslip):
        data = {"event_id": str(event_id)}
        data.update({k: _form_value(v) for k, v in fields.items()})
        data.update(attendee_fields(attendees))
        return self._json(
            "POST", "/admin/tickets", data=data, files={"payslip": _upload(payslip)}
        )

    def update_ticket(self, ticket_id, fields: dict, attendees, payslip=None):
        data = {k: _form_value(v) for k, v in fields.items()}
        data.update(attendee_fields(attendees))
        files = {"payslip": _upload(payslip)} if payslip is not None else None
        return self._json(
            "PATCH", f"/admin/tickets/{ticket_id}", data=data, files=files
        )

    def delete_ticket(self, ticket_id) -> None:
        self.request("DELETE", f"/admin/tickets/{ticket_id}")


def attendee_fields(names: Iterable[str]) -> dict:
    """``attendees[<i>][name]`` multipart keys, in order."""
    return {f"attendees[{i}][name]": name for i, name in enumerate(names)}


def store_session_cookies(request, cookies: Optional[dict]) -> None:
    if cookies:
        request.session[SESSION_COOKIES_KEY] = dict(cookies)
    else:
        request.session.pop(SESSION_COOKIES_KEY, None)
