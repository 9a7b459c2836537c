"""
Form state for the admin ticket editor.

The editor has a buyer name field and a list of attendee name fields.
Attendee #0 is the buyer: editing either one writes the same value into the
other. The page is rendered on the server, so every round trip rebuilds the
state from the POST body and reconciles the two fields before anything else
happens (see ``from_post``).
"""

from decimal import Decimal, InvalidOperation

SCALAR_FIELDS = ("buyer_name", "phone", "email", "reference_number", "total_price")

# Hidden input holding the buyer/attendee #0 value the page was rendered
# with; it tells which of the two the user edited.
SYNCED_NAME_FIELD = "synced_name"


def attendee_field(index: int) -> str:
    return f"attendee_{index}"


class CannotRemoveAttendee(ValueError):
    pass


class TicketFormState:
    def __init__(
        self,
        buyer_name="",
        phone="",
        email="",
        reference_number="",
        total_price=Decimal("0"),
        attendees=None,
    ):
        self.phone = phone
        self.email = email
        self.reference_number = reference_number
        self.total_price = total_price
        self.attendees = list(attendees) if attendees else [""]
        self.buyer_name = buyer_name
        if buyer_name:
            self.attendees[0] = buyer_name
        else:
            self.buyer_name = self.attendees[0]

    def __repr__(self):
        return f"<TicketFormState buyer={self.buyer_name!r} attendees={self.attendees!r}>"

    # --- edits --------------------------------------------------------------

    def set_buyer_name(self, value: str) -> None:
        self.buyer_name = value
        self.attendees[0] = value

    def set_attendee_name(self, index: int, value: str) -> None:
        self.attendees[index] = value
        if index == 0:
            self.buyer_name = value

    def add_attendee(self) -> None:
        self.attendees.append("")

    def can_remove(self, index: int) -> bool:
        return 0 < index < len(self.attendees)

    def remove_attendee(self, index: int) -> None:
        if len(self.attendees) <= 1:
            raise CannotRemoveAttendee("At least one attendee is required.")
        if index == 0:
            raise CannotRemoveAttendee("The first attendee is the buyer.")
        if not self.can_remove(index):
            raise CannotRemoveAttendee(f"There is no attendee {index + 1}.")
        del self.attendees[index]

    # --- construction -------------------------------------------------------

    @classmethod
    def from_ticket(cls, ticket):
        return cls(
            buyer_name=ticket.buyer_name,
            phone=ticket.phone,
            email=ticket.email,
            reference_number=ticket.reference_number,
            total_price=ticket.total_price,
            attendees=[a.name for a in ticket.attendees],
        )

    @classmethod
    def from_post(cls, data):
        """
        Rebuild the state from a submitted editor and reconcile buyer and
        attendee #0. If the buyer field changed since render it wins;
        otherwise a changed attendee #0 is copied into the buyer.
        """
        names = []
        index = 0
        while attendee_field(index) in data:
            names.append(data.get(attendee_field(index), "").strip())
            index += 1

        state = cls(
            phone=data.get("phone", "").strip(),
            email=data.get("email", "").strip(),
            reference_number=data.get("reference_number", "").strip(),
            total_price=_price(data.get("total_price")),
            attendees=names or [""],
        )
        state.reconcile(
            buyer_name=data.get("buyer_name", "").strip(),
            synced_name=data.get(SYNCED_NAME_FIELD),
        )
        return state

    def reconcile(self, buyer_name: str, synced_name=None) -> None:
        first = self.attendees[0]
        if synced_name is None or buyer_name != synced_name:
            self.set_buyer_name(buyer_name if buyer_name or synced_name else first)
        else:
            self.set_attendee_name(0, first)

    # --- output -------------------------------------------------------------

    def initial(self) -> dict:
        data = {name: getattr(self, name) for name in SCALAR_FIELDS}
        for index, name in enumerate(self.attendees):
            data[attendee_field(index)] = name
        data[SYNCED_NAME_FIELD] = self.buyer_name
        return data

    def to_multipart(self):
        """``(fields, attendee names)`` as the backend's ticket endpoints take them."""
        fields = {name: getattr(self, name) for name in SCALAR_FIELDS}
        return fields, list(self.attendees)


def _price(value):
    try:
        return Decimal(str(value)) if value not in (None, "") else Decimal("0")
    except InvalidOperation:
        return value
