"""
Pydantic mirrors of the backend API resources.

These are never persisted; a view validates the JSON it just fetched, renders
it and throws it away. Unknown keys sent by the backend are ignored.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_date(value):
    """Accept ``2025-03-01``, ``2025-03-01T00:00:00.000Z`` or a date."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class Event(BaseModel):
    model_config = ConfigDict(extra="ignore")

    READ_ONLY_FIELDS: ClassVar[FrozenSet[str]] = frozenset(
        {"id", "sold_tickets", "walk_in_cash_count", "walk_in_gcash_count"}
    )

    id: int
    title: str
    display_date: str = ""
    venue_name: str = ""
    venue_address: str = ""
    event_time: str = ""
    description: str = ""
    email_template_content: str = ""
    ticket_price_regular: Decimal = Decimal("0")
    ticket_price_bundle: Optional[Decimal] = None
    bundle_size: Optional[int] = None
    max_tickets: int = 0
    sold_tickets: int = 0
    ticket_deadline: Optional[date] = None
    is_active: bool = False
    inactive_message: Optional[str] = None
    start_date: Optional[date] = None
    walk_in_price: Decimal = Decimal("0")
    walk_in_cash_count: int = 0
    walk_in_gcash_count: int = 0
    poster_image_url: Optional[str] = None

    @field_validator("start_date", "ticket_deadline", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return _to_date(value)

    @property
    def tickets_remaining(self) -> int:
        return max(self.max_tickets - self.sold_tickets, 0)

    @property
    def total_walk_ins(self) -> int:
        return self.walk_in_cash_count + self.walk_in_gcash_count

    def editable_data(self) -> dict:
        """Every field an edit form may send back; read-only ones dropped."""
        return self.model_dump(exclude=set(self.READ_ONLY_FIELDS))

    @property
    def walk_in_counts(self) -> "WalkInCount":
        return WalkInCount(cash=self.walk_in_cash_count, gcash=self.walk_in_gcash_count)


class Attendee(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: str
    checked_in: bool = False
    is_primary: bool = False
    group_identifier: str = ""
    ticket_purchase_id: Optional[int] = None

    @property
    def is_group_primary(self) -> bool:
        return self.name == self.group_identifier


class TicketPurchase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    event_id: int
    buyer_name: str = ""
    phone: str = ""
    email: str = ""
    payslip_url: Optional[str] = None
    reference_number: str = ""
    total_price: Decimal = Decimal("0")
    created_at: Optional[datetime] = None
    attendees: List[Attendee] = Field(default_factory=list)

    @property
    def attendee_names(self) -> str:
        return ", ".join(a.name for a in self.attendees)


class WalkInCount(BaseModel):
    cash: int = Field(default=0, ge=0)
    gcash: int = Field(default=0, ge=0)

    @classmethod
    def from_api(cls, data: dict, current: Optional["WalkInCount"] = None):
        """
        Walk-in endpoints answer with either ``{"cash", "gcash"}`` or the
        event's ``walk_in_<type>_count`` keys, sometimes only for the type
        that changed. Missing counters keep their ``current`` value.
        """
        current = current or cls()
        cash = data.get("cash", data.get("walk_in_cash_count", current.cash))
        gcash = data.get("gcash", data.get("walk_in_gcash_count", current.gcash))
        return cls(cash=cash, gcash=gcash)


class PageContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: str = ""

    @property
    def paragraphs(self) -> List[str]:
        # CMS text stores paragraph breaks as a literal backslash-n
        text = self.content.replace("\\n", "\n")
        return [p.strip() for p in text.split("\n") if p.strip()]
