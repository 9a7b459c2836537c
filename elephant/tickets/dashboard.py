"""Search and sort for the admin ticket table."""

SORT_KEYS = {
    "buyer_name": lambda t: t.buyer_name,
    "attendees": lambda t: t.attendee_names,
    "total_price": lambda t: t.total_price,
    "reference_number": lambda t: t.reference_number,
    "contact": lambda t: f"{t.email} {t.phone}",
    "created_at": lambda t: t.created_at.timestamp() if t.created_at else 0,
}

DEFAULT_SORT = ("created_at", "desc")


def tickets_for_event(tickets, event_id):
    """The backend lists every ticket; keep this event's."""
    return [t for t in tickets if t.event_id == int(event_id)]


def search_tickets(tickets, term):
    if not term:
        return list(tickets)
    term = term.lower()
    return [
        t
        for t in tickets
        if term in t.buyer_name.lower()
        or term in t.email.lower()
        or term in t.reference_number.lower()
        or any(term in a.name.lower() for a in t.attendees)
    ]


def parse_sort(key, direction):
    if key not in SORT_KEYS:
        return DEFAULT_SORT
    return key, "desc" if direction == "desc" else "asc"


def sort_tickets(tickets, key, direction):
    key, direction = parse_sort(key, direction)
    return sorted(tickets, key=SORT_KEYS[key], reverse=direction == "desc")


def next_sort(current_key, current_direction, clicked_key):
    """Clicking the active ascending column flips it; anything else sorts ascending."""
    if clicked_key == current_key and current_direction == "asc":
        return clicked_key, "desc"
    return clicked_key, "asc"
