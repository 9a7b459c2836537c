"""PDF reports the backend generates for an event."""

import re
from collections import OrderedDict

# backend path segment -> (filename suffix, label on the downloads page)
REPORTS = OrderedDict(
    [
        ("attendee-list", ("Attendees", "Attendee List")),
        ("accounting", ("Accounting", "Financial Report")),
        ("email-list", ("Emails", "Email List")),
    ]
)

_NON_WORD = re.compile(r"[^\w]", re.ASCII)


def report_filename(title, suffix):
    """``"Jazz Night: Live!"`` + ``"Accounting"`` -> ``Jazz_Night__Live__Accounting.pdf``"""
    return f"{_NON_WORD.sub('_', title)}_{suffix}.pdf"
