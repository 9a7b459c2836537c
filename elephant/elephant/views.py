import logging

from django.conf import settings
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone

from backend.client import BackendClient
from backend.exceptions import BackendError, BackendUnavailable
from backend.resources import PageContent
from backend.shortcuts import load_error_response
from tickets.errors import apply_backend_error
from tickets.forms import PurchaseForm
from tickets.state import TicketFormState
from tickets.views import apply_editor_action

from .content import (
    ABOUT_FALLBACK,
    CONTACT_FALLBACK,
    CORE_MEMBERS,
    FEATURES,
    MERCH,
)
from .listing import paginate_events

logger = logging.getLogger(__name__)

LAST_PURCHASE_KEY = "last_purchase"
PURCHASE_FAILED_MESSAGE = "Failed to submit your purchase. Please try again."


def _page_paragraphs(name, fallback):
    """CMS text for a public page, or the built-in text when it can't be had."""
    try:
        page = BackendClient().get_public_page(name)
    except BackendError as exc:
        logger.warning("Page content %r unavailable, using fallback: %s", name, exc)
        page = None
    if page is None or not page.content.strip():
        page = PageContent(content=fallback)
    return page.paragraphs


def index(request):
    try:
        events = BackendClient().get_public_events()
    except BackendError as exc:
        logger.error("Public event list unavailable: %s", exc)
        events = []

    listing = paginate_events(
        events,
        request.GET.get("page"),
        timezone.localdate(),
        settings.EVENTS_PAGE_SIZE,
    )
    return render(request, "elephant/index.html", listing)


def about(request):
    return render(
        request,
        "elephant/about.html",
        {
            "paragraphs": _page_paragraphs("about", ABOUT_FALLBACK),
            "members": CORE_MEMBERS,
        },
    )


def contact(request):
    return render(
        request,
        "elephant/contact.html",
        {"paragraphs": _page_paragraphs("contact", CONTACT_FALLBACK)},
    )


def merch(request):
    return render(request, "elephant/merch.html", {"item": MERCH})


def features(request):
    return render(request, "elephant/features.html", {"features": FEATURES})


def fundraiser(request):
    return render(request, "elephant/fundraiser.html")


# --- Ticket purchase --------------------------------------------------------


def sales_closed_message(event, today):
    """Why tickets can't be bought right now, or None when they can."""
    if not event.is_active:
        return event.inactive_message or "Ticket sales are closed for this event."
    if event.ticket_deadline and event.ticket_deadline < today:
        return "Ticket sales are closed for this event."
    if event.max_tickets and event.tickets_remaining == 0:
        return "This event is sold out."
    return None


def purchase(request, event_id):
    client = BackendClient()
    try:
        event = client.get_public_event(event_id)
    except BackendError as exc:
        return load_error_response(
            request, exc, back_url=reverse("elephant:index"), back_label="Back to Events"
        )

    closed = sales_closed_message(event, timezone.localdate())
    if closed:
        return render(
            request, "elephant/purchase.html", {"event": event, "closed_message": closed}
        )

    if request.method != "POST":
        form = PurchaseForm.for_state(TicketFormState())
        return render(request, "elephant/purchase.html", {"event": event, "form": form})

    state = TicketFormState.from_post(request.POST)
    if apply_editor_action(request, state, request.POST.get("action", "save")):
        form = PurchaseForm.for_state(state)
        return render(request, "elephant/purchase.html", {"event": event, "form": form})

    form = PurchaseForm.for_state(state, files=request.FILES, bound=True)
    if form.is_valid():
        fields, attendees = form.cleaned_state().to_multipart()
        try:
            ticket = client.purchase_tickets(
                event_id,
                quantity=form.quantity,
                buyer_name=fields["buyer_name"],
                phone=fields["phone"],
                email=fields["email"],
                reference_number=fields["reference_number"],
                attendees=attendees,
                payslip=form.cleaned_data["payslip"],
            )
        except BackendUnavailable as exc:
            logger.error("Purchase for event %s failed: %s", event_id, exc)
            form.add_error(None, PURCHASE_FAILED_MESSAGE)
        except BackendError as exc:
            logger.warning("Purchase for event %s rejected: %s", event_id, exc.message)
            apply_backend_error(form, exc.message)
        else:
            request.session[LAST_PURCHASE_KEY] = {
                "event_title": event.title,
                "buyer_name": ticket.buyer_name,
                "reference_number": ticket.reference_number,
                "total_price": str(ticket.total_price),
                "attendees": [a.name for a in ticket.attendees],
            }
            return redirect("elephant:purchase_complete", event_id=event_id)

    return render(request, "elephant/purchase.html", {"event": event, "form": form})


def purchase_complete(request, event_id):
    summary = request.session.pop(LAST_PURCHASE_KEY, None)
    if summary is None:
        return redirect("elephant:purchase", event_id=event_id)
    return render(request, "elephant/purchase_complete.html", {"purchase": summary})


def page_not_found_view(request, exception):
    return render(request, "elephant/404.html", status=404)
