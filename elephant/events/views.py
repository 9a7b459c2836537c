import logging
from datetime import timedelta
from urllib.parse import urlencode

from django.contrib import messages
from django.http import Http404, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.decorators import admin_login_required
from backend.client import PAYMENT_TYPES, BackendClient
from backend.exceptions import BackendAuthError, BackendError
from backend.resources import WalkInCount
from backend.shortcuts import load_error_response

from .door import can_decrement, door_totals, filter_attendees, group_attendees
from .forms import EventForm, NewEventForm
from .reports import REPORTS, report_filename

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_TEMPLATE = "Thank you for your purchase!"
DEFAULT_INACTIVE_MESSAGE = "This event is not currently active."
WALK_IN_ACTIONS = ("increment", "decrement")
PAYMENT_LABELS = {"cash": "Cash", "gcash": "GCash"}


def _by_start_date_desc(events):
    """Newest first; events without a start date sink to the bottom."""
    dated = sorted(
        (e for e in events if e.start_date), key=lambda e: e.start_date, reverse=True
    )
    return dated + [e for e in events if not e.start_date]


def new_event_defaults(title, start_date, latest=None, today=None):
    """
    Placeholder values for a freshly created event. The email template and
    inactive message are carried over from the most recent existing event.
    """
    today = today or timezone.localdate()
    return {
        "title": title,
        "start_date": start_date,
        "display_date": "Date to be announced",
        "venue_name": "Venue to be announced",
        "venue_address": "Address to be announced",
        "event_time": "Time to be announced",
        "description": "Event description to be added",
        "ticket_price_regular": 100,
        "ticket_price_bundle": 80,
        "bundle_size": 2,
        "max_tickets": 100,
        "ticket_deadline": today + timedelta(days=30),
        "is_active": False,
        "walk_in_price": 120,
        "email_template_content": (latest and latest.email_template_content)
        or DEFAULT_EMAIL_TEMPLATE,
        "inactive_message": (latest and latest.inactive_message)
        or DEFAULT_INACTIVE_MESSAGE,
    }


def _dashboard_url():
    return reverse("events:dashboard")


def _load_event(request, client, event_id):
    """``(event, None)`` or ``(None, error_response)``."""
    try:
        return client.get_event(event_id), None
    except BackendError as exc:
        return None, load_error_response(request, exc, back_url=_dashboard_url())


# --- Dashboard / create -----------------------------------------------------


@admin_login_required
def dashboard(request):
    client = BackendClient.for_request(request)
    try:
        events = _by_start_date_desc(client.get_events())
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Admin dashboard could not load events: %s", exc)
        return render(
            request,
            "events/dashboard.html",
            {"error": "Failed to load events data. Please try again later."},
            status=502,
        )

    return render(
        request,
        "events/dashboard.html",
        {
            "active_events": [e for e in events if e.is_active],
            "inactive_events": [e for e in events if not e.is_active],
        },
    )


@admin_login_required
def new_event(request):
    form = NewEventForm(request.POST or None)
    error = None

    if request.method == "POST" and form.is_valid():
        client = BackendClient.for_request(request)
        try:
            existing = _by_start_date_desc(client.get_events())
        except BackendAuthError:
            raise
        except BackendError as exc:
            logger.warning("Creating event without a template event: %s", exc)
            existing = []

        data = new_event_defaults(
            form.cleaned_data["title"],
            form.cleaned_data["start_date"],
            latest=existing[0] if existing else None,
        )
        try:
            event = client.create_event(data)
        except BackendAuthError:
            raise
        except BackendError as exc:
            logger.error("Event creation failed: %s", exc)
            error = exc.message or "Failed to create event. Please try again."
        else:
            messages.success(request, "Event created. Fill in the details below.")
            return redirect("events:event_detail", event_id=event.id)

    return render(request, "events/new_event.html", {"form": form, "error": error})


# --- Detail / edit ----------------------------------------------------------


@admin_login_required
def event_detail(request, event_id):
    client = BackendClient.for_request(request)
    event, error_response = _load_event(request, client, event_id)
    if error_response:
        return error_response

    if request.method == "POST":
        form = EventForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                client.update_event(
                    event_id, form.event_data(), poster=form.cleaned_data.get("poster")
                )
            except BackendAuthError:
                raise
            except BackendError as exc:
                logger.error("Event %s update failed: %s", event_id, exc)
                form.add_error(
                    None, exc.message or "Failed to update event. Please try again."
                )
            else:
                messages.success(request, "Event updated successfully!")
                return redirect("events:event_detail", event_id=event_id)
    else:
        form = EventForm.for_event(event)

    return render(request, "events/event_detail.html", {"event": event, "form": form})


@admin_login_required
@require_POST
def toggle_active(request, event_id):
    client = BackendClient.for_request(request)
    event, error_response = _load_event(request, client, event_id)
    if error_response:
        return error_response

    try:
        updated = client.update_event(event_id, {"is_active": not event.is_active})
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Event %s status toggle failed: %s", event_id, exc)
        messages.error(request, "Failed to update event status. Please try again.")
    else:
        state = "activated" if updated.is_active else "deactivated"
        messages.success(request, f"Event {state} successfully!")
    return redirect("events:event_detail", event_id=event_id)


@admin_login_required
def delete_event(request, event_id):
    if request.method != "POST":
        return render(
            request,
            "elephant/confirm_delete.html",
            {
                "title": "Delete Event",
                "question": "Are you sure you want to delete this event? "
                "This action cannot be undone.",
                "cancel_url": reverse("events:event_detail", args=[event_id]),
            },
        )

    client = BackendClient.for_request(request)
    try:
        client.delete_event(event_id)
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Event %s deletion failed: %s", event_id, exc)
        messages.error(request, "Failed to delete event. Please try again.")
        return redirect("events:event_detail", event_id=event_id)

    messages.success(request, "Event deleted.")
    return redirect("events:dashboard")


# --- Door management --------------------------------------------------------


@admin_login_required
def door(request, event_id):
    client = BackendClient.for_request(request)
    try:
        event = client.get_event(event_id)
        attendees = client.get_event_attendees(event_id)
    except BackendError as exc:
        return load_error_response(request, exc, back_url=_dashboard_url())

    term = request.GET.get("q", "").strip()
    return render(
        request,
        "events/door.html",
        {
            "event": event,
            "search_term": term,
            "groups": group_attendees(filter_attendees(attendees, term)),
            "totals": door_totals(attendees, event),
            "walk_in_rows": _walk_in_rows(event),
        },
    )


def _walk_in_rows(event):
    counts = event.walk_in_counts
    return [
        (
            payment_type,
            PAYMENT_LABELS[payment_type],
            getattr(counts, payment_type),
            can_decrement(counts, payment_type),
        )
        for payment_type in PAYMENT_TYPES
    ]


def _door_redirect(request, event_id):
    url = reverse("events:door", args=[event_id])
    term = request.POST.get("q", "").strip()
    if term:
        url = f"{url}?{urlencode({'q': term})}"
    return redirect(url)


@admin_login_required
@require_POST
def check_in(request, event_id, attendee_id):
    client = BackendClient.for_request(request)
    try:
        attendee = client.toggle_attendee_check_in(attendee_id)
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Check-in toggle for attendee %s failed: %s", attendee_id, exc)
        messages.error(
            request, exc.message or "Failed to update check-in status. Please try again."
        )
    else:
        action = "checked in" if attendee.checked_in else "checked out"
        messages.success(request, f"Successfully {action} {attendee.name}")
    return _door_redirect(request, event_id)


@admin_login_required
@require_POST
def walk_in(request, event_id, action):
    if action not in WALK_IN_ACTIONS:
        raise Http404("Unknown walk-in action")
    payment_type = request.POST.get("payment_type", "")
    if payment_type not in PAYMENT_TYPES:
        messages.error(request, "Unknown payment type.")
        return _door_redirect(request, event_id)

    client = BackendClient.for_request(request)
    try:
        current = client.get_walk_in_counts(event_id)
    except BackendError as exc:
        return load_error_response(request, exc, back_url=_dashboard_url())

    if action == "decrement" and not can_decrement(current, payment_type):
        return _door_redirect(request, event_id)

    try:
        if action == "increment":
            result = client.increment_walk_in(event_id, payment_type)
        else:
            result = client.decrement_walk_in(event_id, payment_type)
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Walk-in %s for event %s failed: %s", action, event_id, exc)
        messages.error(
            request, exc.message or "Failed to update walk-in count. Please try again."
        )
    else:
        counts = WalkInCount.from_api(result, current=current)
        count = getattr(counts, payment_type)
        messages.success(
            request,
            f"Successfully {action}ed {payment_type} walk-in count (now {count})",
        )
    return _door_redirect(request, event_id)


# --- Reports ----------------------------------------------------------------


def _report_links(event_id):
    return [
        {
            "key": key,
            "label": label,
            "url": reverse("events:download_report", args=[event_id, key]),
        }
        for key, (_, label) in REPORTS.items()
    ]


def _render_downloads(request, event_id, error=None, status=200):
    client = BackendClient.for_request(request)
    event, error_response = _load_event(request, client, event_id)
    if error_response:
        return error_response

    return render(
        request,
        "events/downloads.html",
        {"event": event, "reports": _report_links(event_id), "error": error},
        status=status,
    )


@admin_login_required
def downloads(request, event_id):
    return _render_downloads(request, event_id)


@admin_login_required
def download_report(request, event_id, report):
    if report not in REPORTS:
        return _render_downloads(request, event_id, error="Unknown report.", status=404)

    suffix, label = REPORTS[report]
    client = BackendClient.for_request(request)
    try:
        event = client.get_event(event_id)
        pdf = client.get_report_pdf(event_id, report)
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Report %s for event %s failed: %s", report, event_id, exc)
        return _render_downloads(
            request,
            event_id,
            error=f"Failed to download {label}. Please try again.",
            status=502,
        )

    response = HttpResponse(pdf, content_type="application/pdf")
    filename = report_filename(event.title, suffix)
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
