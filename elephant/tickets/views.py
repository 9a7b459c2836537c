import logging
from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse

from accounts.decorators import admin_login_required
from backend.client import BackendClient
from backend.exceptions import (
    BackendAuthError,
    BackendError,
    BackendNotFound,
    BackendUnavailable,
)
from backend.shortcuts import load_error_response

from .dashboard import (
    SORT_KEYS,
    next_sort,
    parse_sort,
    search_tickets,
    sort_tickets,
    tickets_for_event,
)
from .errors import apply_backend_error
from .forms import TicketForm
from .state import CannotRemoveAttendee, TicketFormState

logger = logging.getLogger(__name__)

REMOVE_ACTION_PREFIX = "remove_attendee:"
SAVE_FAILED_MESSAGE = "Failed to save ticket. Please try again."


def apply_editor_action(request, state, action):
    """
    Apply an add/remove attendee button press to ``state``.
    Returns False when ``action`` is not one of those buttons.
    """
    if action == "add_attendee":
        state.add_attendee()
        return True
    if action.startswith(REMOVE_ACTION_PREFIX):
        index = action[len(REMOVE_ACTION_PREFIX):]
        try:
            state.remove_attendee(int(index))
        except CannotRemoveAttendee as exc:
            messages.warning(request, f"Cannot remove that attendee. {exc}")
        except ValueError:
            messages.warning(request, "Cannot remove that attendee.")
        return True
    return False


def handle_ticket_editor(request, client, event_id, ticket_id=None):
    """
    Process one submission of the ticket editor.

    Returns ``(form, saved)``. Add/remove attendee buttons only change the
    form; "save" validates, then creates (``ticket_id`` None) or updates the
    ticket. Backend rejections are mapped onto the form's fields.
    """
    creating = ticket_id is None
    state = TicketFormState.from_post(request.POST)
    action = request.POST.get("action", "save")

    if apply_editor_action(request, state, action):
        return TicketForm.for_state(state, require_payslip=creating), False

    form = TicketForm.for_state(
        state, files=request.FILES, bound=True, require_payslip=creating
    )
    if not form.is_valid():
        return form, False

    fields, attendees = form.cleaned_state().to_multipart()
    payslip = form.cleaned_data.get("payslip") or None
    try:
        if creating:
            client.create_ticket(event_id, fields, attendees, payslip)
        else:
            client.update_ticket(ticket_id, fields, attendees, payslip)
    except BackendAuthError:
        raise
    except BackendUnavailable as exc:
        logger.error("Ticket save for event %s failed: %s", event_id, exc)
        form.add_error(None, SAVE_FAILED_MESSAGE)
        return form, False
    except BackendError as exc:
        logger.warning("Ticket save for event %s rejected: %s", event_id, exc.message)
        apply_backend_error(form, exc.message)
        return form, False

    messages.success(
        request, "Ticket created successfully!" if creating else "Ticket updated successfully!"
    )
    return form, True


def _sort_links(term, sort_key, direction):
    links = {}
    for key in SORT_KEYS:
        new_key, new_dir = next_sort(sort_key, direction, key)
        links[key] = "?" + urlencode({"q": term, "sort": new_key, "dir": new_dir})
    return links


def _render_dashboard(request, event_id, form=None, editing=None):
    """
    Fetch the event and its tickets and render the table. When ``editing``
    is a ticket id and no bound ``form`` is given, the editor is prefilled
    from that ticket.
    """
    client = BackendClient.for_request(request)
    try:
        event = client.get_event(event_id)
        tickets = tickets_for_event(client.get_tickets(), event_id)
    except BackendError as exc:
        return load_error_response(
            request,
            exc,
            back_url=reverse("events:event_detail", args=[event_id]),
            back_label="Back to Event",
        )

    term = request.GET.get("q", "").strip()
    sort_key, direction = parse_sort(request.GET.get("sort"), request.GET.get("dir"))
    shown = sort_tickets(search_tickets(tickets, term), sort_key, direction)

    ticket = next((t for t in tickets if t.id == editing), None)
    if editing is not None and ticket is None:
        return load_error_response(
            request,
            BackendNotFound("Ticket not found", status=404),
            back_url=reverse("tickets:dashboard", args=[event_id]),
            back_label="Back to Tickets",
            not_found="Ticket not found",
        )
    if ticket is not None and form is None:
        form = TicketForm.for_state(TicketFormState.from_ticket(ticket))

    return render(
        request,
        "tickets/dashboard.html",
        {
            "event": event,
            "tickets": shown,
            "ticket_count": len(tickets),
            "search_term": term,
            "sort_key": sort_key,
            "sort_dir": direction,
            "sort_links": _sort_links(term, sort_key, direction),
            "form": form,
            "editing_ticket_id": editing,
        },
    )


# --- Views ------------------------------------------------------------------


@admin_login_required
def ticket_dashboard(request, event_id):
    """List this event's tickets; the create form opens with ``?new=1``."""
    form = None
    if request.method == "POST":
        client = BackendClient.for_request(request)
        form, saved = handle_ticket_editor(request, client, event_id)
        if saved:
            return redirect("tickets:dashboard", event_id=event_id)
    elif request.GET.get("new") == "1":
        form = TicketForm.for_state(TicketFormState(), require_payslip=True)

    return _render_dashboard(request, event_id, form=form)


@admin_login_required
def edit_ticket(request, event_id, ticket_id):
    client = BackendClient.for_request(request)
    if request.method == "POST":
        form, saved = handle_ticket_editor(request, client, event_id, ticket_id)
        if saved:
            return redirect("tickets:dashboard", event_id=event_id)
        return _render_dashboard(request, event_id, form=form, editing=ticket_id)

    return _render_dashboard(request, event_id, editing=ticket_id)


@admin_login_required
def delete_ticket(request, event_id, ticket_id):
    if request.method != "POST":
        return render(
            request,
            "elephant/confirm_delete.html",
            {
                "title": "Delete Ticket",
                "question": "Are you sure you want to delete this ticket? "
                "This action cannot be undone.",
                "cancel_url": reverse("tickets:dashboard", args=[event_id]),
            },
        )

    client = BackendClient.for_request(request)
    try:
        client.delete_ticket(ticket_id)
    except BackendAuthError:
        raise
    except BackendError as exc:
        logger.error("Ticket %s deletion failed: %s", ticket_id, exc)
        messages.error(request, "Failed to delete ticket. Please try again.")
    else:
        messages.success(request, "Ticket deleted.")
    return redirect("tickets:dashboard", event_id=event_id)
