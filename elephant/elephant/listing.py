"""
Ordering and pagination of the public event list.

The backend returns every event in one response; ordering and paging happen
here. Upcoming events come first, soonest first; past events follow, most
recent first. A start date means midnight of that day, so by the time anyone
looks at the listing an event dated today has started and counts as past.
On page 1 the soonest upcoming event gets the featured slot and is left out
of that page's grid.
"""

from datetime import date

from django.core.paginator import Paginator


def _start(event):
    return event.start_date or date.min


def partition_events(events, today):
    """Return ``(upcoming, past)``, each already sorted for display."""
    upcoming = [e for e in events if e.start_date and e.start_date > today]
    past = [e for e in events if not (e.start_date and e.start_date > today)]
    upcoming.sort(key=_start)
    past.sort(key=_start, reverse=True)
    return upcoming, past


def paginate_events(events, page_number, today, page_size):
    """
    Build the listing for one page.

    ``page_number`` comes straight from the query string; anything that is
    not a valid page number falls back the way Django's ``get_page`` does
    (non-numeric -> first page, too large -> last page).
    """
    upcoming, past = partition_events(events, today)
    ordered = upcoming + past

    paginator = Paginator(ordered, page_size)
    page = paginator.get_page(page_number)

    featured = upcoming[0] if upcoming and page.number == 1 else None
    grid = [e for e in page.object_list if e is not featured]

    return {
        "page": page,
        "featured_event": featured,
        "events": grid,
        "upcoming_ids": {e.id for e in upcoming},
    }
