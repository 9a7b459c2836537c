"""Attendee search, grouping and counters for the door management page."""

from collections import OrderedDict


def filter_attendees(attendees, term):
    """Case-insensitive substring match on name or group identifier."""
    term = (term or "").strip().lower()
    if not term:
        return list(attendees)
    return [
        a
        for a in attendees
        if term in a.name.lower() or term in a.group_identifier.lower()
    ]


def group_attendees(attendees):
    """
    Group attendees by ``group_identifier``.

    Returns ``[(group_identifier, members), ...]`` with groups in the order
    they were first seen. Within a group the primary attendee (the one whose
    name is the group identifier) comes first; the others keep their order.
    """
    groups = OrderedDict()
    for attendee in attendees:
        groups.setdefault(attendee.group_identifier, []).append(attendee)

    return [
        (identifier, sorted(members, key=lambda a: not a.is_group_primary))
        for identifier, members in groups.items()
    ]


def door_totals(attendees, event):
    checked_in = sum(1 for a in attendees if a.checked_in)
    walk_ins = event.total_walk_ins
    return {
        "checked_in": checked_in,
        "walk_ins": walk_ins,
        "total_guests": checked_in + walk_ins,
    }


def can_decrement(counts, payment_type):
    """A walk-in counter never goes below zero."""
    return getattr(counts, payment_type) > 0
