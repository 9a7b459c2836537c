from decimal import Decimal

from conftest import make_ticket
from tickets.dashboard import (
    DEFAULT_SORT,
    next_sort,
    parse_sort,
    search_tickets,
    sort_tickets,
    tickets_for_event,
)


def _tickets():
    return [
        make_ticket(id=1, buyer_name="Carl", total_price="300", created_at="2025-01-02T00:00:00Z",
                    attendees=[{"name": "Carl"}]),
        make_ticket(id=2, buyer_name="ana", email="x@y.z", total_price="100",
                    created_at="2025-01-03T00:00:00Z", attendees=[{"name": "ana"}, {"name": "Zed"}]),
        make_ticket(id=3, buyer_name="Ben", event_id=6, reference_number="GC-77",
                    created_at="2025-01-01T00:00:00Z"),
    ]


def test_tickets_for_event_filters_by_id():
    assert [t.id for t in tickets_for_event(_tickets(), "5")] == [1, 2]


def test_search_covers_buyer_email_reference_and_attendees():
    tickets = _tickets()
    assert [t.id for t in search_tickets(tickets, "zed")] == [2]
    assert [t.id for t in search_tickets(tickets, "gc-77")] == [3]
    assert [t.id for t in search_tickets(tickets, "X@Y")] == [2]
    assert len(search_tickets(tickets, "")) == 3


def test_default_sort_is_newest_first():
    assert parse_sort(None, None) == DEFAULT_SORT
    assert [t.id for t in sort_tickets(_tickets(), *DEFAULT_SORT)] == [2, 1, 3]


def test_sort_by_price_ascending():
    ordered = sort_tickets(_tickets(), "total_price", "asc")
    assert [t.total_price for t in ordered][:2] == [Decimal("100"), Decimal("300")]


def test_unknown_sort_key_uses_default():
    assert parse_sort("password", "asc") == DEFAULT_SORT


def test_clicking_active_column_toggles_direction():
    assert next_sort("buyer_name", "asc", "buyer_name") == ("buyer_name", "desc")
    assert next_sort("buyer_name", "desc", "buyer_name") == ("buyer_name", "asc")
    assert next_sort("buyer_name", "desc", "email") == ("email", "asc")
