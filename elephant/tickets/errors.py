"""
Map the backend's ticket error messages onto form fields.

The backend reports ticket validation problems as prose only, so this is a
lookup on known phrases. A message that matches nothing lands in
``general``. Later rules overwrite earlier ones for the same field, which is
why "not active" wins over "not found" when a message carries both.
"""

# (phrases, field, message); a None message means "show the backend's text"
PHRASE_RULES = [
    (
        ("Email already used", "Duplicate email"),
        "email",
        "This email has already been used for this event",
    ),
    (
        ("Reference number already used", "Duplicate reference"),
        "reference_number",
        "This reference number has already been used for this event",
    ),
    (("Event not found", "not found"), "general", "This event is no longer available"),
    (("Event is not active", "not active"), "general", "This event is no longer active"),
    (("tickets left", "sold out"), "general", None),
]

ATTENDEE_RULES = [
    ("count must match", "Number of attendees must match ticket quantity"),
    ("Invalid attendees format", "Invalid attendee format"),
    ("At least one attendee is required", "At least one attendee is required"),
]

VALIDATION_RULES = [
    ("email", "email", "Please enter a valid email address"),
    ("phone", "phone", "Please enter a valid phone number"),
    ("buyer_name", "buyer_name", "Please enter a valid name"),
    ("reference_number", "reference_number", "Please enter a valid reference number"),
    ("total_price", "total_price", "Please enter a valid price"),
]


def _mentions(message, phrases):
    return any(phrase in message for phrase in phrases)


def map_backend_error(message):
    """
    Return ``{field: error}``; ``attendees`` maps to a list of messages,
    every other field to a single string.
    """
    message = message or ""
    errors = {}

    for phrases, field, text in PHRASE_RULES:
        if _mentions(message, phrases):
            errors[field] = text if text is not None else message

    if _mentions(message, ("attendees", "Attendees")):
        for phrase, text in ATTENDEE_RULES:
            if phrase in message:
                errors["attendees"] = [text]
                break
        else:
            errors["attendees"] = ["Please check attendee information"]

    if _mentions(message, ("Payslip", "payslip")):
        if "upload is required" in message:
            errors["payslip"] = "Payslip upload is required"
        else:
            errors["payslip"] = "Please upload a valid payslip image (JPEG, PNG, WebP)"

    if _mentions(message, ("File type", "file type", "Failed to upload")):
        errors["payslip"] = message

    if "Validation failed" in message:
        for phrase, field, text in VALIDATION_RULES:
            if phrase in message:
                errors[field] = text

    if not errors:
        errors["general"] = message or "An unexpected error occurred"

    return errors


def apply_backend_error(form, message):
    """Attach mapped errors to a bound ``TicketForm``/``PurchaseForm``."""
    errors = map_backend_error(message)
    for field, text in errors.items():
        if field == "attendees":
            form.attendee_errors = list(text)
        elif field == "general" or field not in form.fields:
            form.add_error(None, text)
        else:
            form.add_error(field, text)
    return errors
