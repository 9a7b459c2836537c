from decimal import Decimal

from django import forms
from django.core.validators import FileExtensionValidator

from .state import TicketFormState, attendee_field

PAYSLIP_EXTENSIONS = ["jpg", "jpeg", "png", "webp"]


class TicketForm(forms.Form):
    """
    Admin ticket editor. Attendee name fields are added per instance
    (``attendee_0`` .. ``attendee_<n-1>``) and every one is required, so a
    ticket without a named attendee never reaches the backend.
    """

    buyer_name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={"class": "form-control", "data-buyer": "1"}),
    )
    phone = forms.CharField(
        max_length=50,
        widget=forms.TextInput(
            attrs={"class": "form-control", "placeholder": "09XX XXX XXXX"}
        ),
    )
    email = forms.EmailField(
        widget=forms.EmailInput(
            attrs={"class": "form-control", "placeholder": "you@example.com"}
        ),
    )
    reference_number = forms.CharField(
        max_length=100,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )
    total_price = forms.DecimalField(
        label="Total Price (₱)",
        min_value=0,
        max_digits=10,
        decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )
    payslip = forms.ImageField(
        required=False,
        validators=[FileExtensionValidator(PAYSLIP_EXTENSIONS)],
        widget=forms.ClearableFileInput(attrs={"class": "form-control"}),
    )
    synced_name = forms.CharField(required=False, widget=forms.HiddenInput)

    payslip_required_message = "Payslip is required for new tickets"

    def __init__(self, *args, attendee_count=1, require_payslip=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.attendee_count = max(attendee_count, 1)
        self.attendee_errors = []

        payslip = self.fields["payslip"]
        payslip.required = require_payslip
        payslip.error_messages["required"] = self.payslip_required_message

        for index in range(self.attendee_count):
            self.fields[attendee_field(index)] = forms.CharField(
                label=f"Attendee {index + 1}",
                max_length=255,
                error_messages={"required": "Attendee name is required"},
                widget=forms.TextInput(
                    attrs={"class": "form-control", "data-attendee-index": index}
                ),
            )

    @classmethod
    def for_state(cls, state: TicketFormState, files=None, bound=False, **kwargs):
        """An editor showing ``state``; ``bound=True`` validates it too."""
        kwargs.setdefault("attendee_count", len(state.attendees))
        if bound:
            return cls(data=state.initial(), files=files, **kwargs)
        return cls(initial=state.initial(), **kwargs)

    def attendee_fields(self):
        return [self[attendee_field(i)] for i in range(self.attendee_count)]

    def cleaned_state(self) -> TicketFormState:
        """The validated editor as form state, ready for ``to_multipart``."""
        data = self.cleaned_data
        return TicketFormState(
            buyer_name=data["buyer_name"],
            phone=data["phone"],
            email=data["email"],
            reference_number=data["reference_number"],
            total_price=data.get("total_price") or Decimal("0"),
            attendees=[data[attendee_field(i)] for i in range(self.attendee_count)],
        )


class PurchaseForm(TicketForm):
    """Public ticket purchase: one ticket per attendee, payslip always required."""

    payslip_required_message = "Please upload a payslip image"

    def __init__(self, *args, **kwargs):
        kwargs["require_payslip"] = True
        super().__init__(*args, **kwargs)
        del self.fields["total_price"]

    @property
    def quantity(self) -> int:
        return self.attendee_count
