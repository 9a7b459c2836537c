from django import forms
from django.core.validators import FileExtensionValidator

POSTER_EXTENSIONS = ["jpg", "jpeg", "png", "webp"]


def _text(**attrs):
    return forms.TextInput(attrs={"class": "form-control", **attrs})


def _number(**attrs):
    return forms.NumberInput(attrs={"class": "form-control", **attrs})


def _date():
    return forms.DateInput(attrs={"class": "form-control", "type": "date"})


class NewEventForm(forms.Form):
    title = forms.CharField(max_length=255, widget=_text())
    start_date = forms.DateField(widget=_date())


class EventForm(forms.Form):
    """
    Editable event fields. Sold tickets and walk-in counters belong to the
    backend and are never part of this form.
    """

    title = forms.CharField(max_length=255, widget=_text())
    display_date = forms.CharField(max_length=255, widget=_text())
    venue_name = forms.CharField(max_length=255, widget=_text())
    venue_address = forms.CharField(max_length=255, widget=_text())
    event_time = forms.CharField(max_length=255, widget=_text())
    start_date = forms.DateField(widget=_date())
    ticket_price_regular = forms.DecimalField(
        label="Regular Price (₱)", min_value=0, decimal_places=2, widget=_number(step="0.01")
    )
    ticket_price_bundle = forms.DecimalField(
        label="Bundle Price (₱)",
        required=False,
        min_value=0,
        decimal_places=2,
        widget=_number(step="0.01"),
    )
    bundle_size = forms.IntegerField(required=False, min_value=2, widget=_number())
    max_tickets = forms.IntegerField(min_value=1, widget=_number())
    walk_in_price = forms.DecimalField(
        label="Walk-in Price (₱)", min_value=0, decimal_places=2, widget=_number(step="0.01")
    )
    ticket_deadline = forms.DateField(widget=_date())
    description = forms.CharField(
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 4})
    )
    email_template_content = forms.CharField(
        label="Email Template",
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 4}),
    )
    inactive_message = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2}),
    )
    is_active = forms.BooleanField(required=False)
    poster = forms.ImageField(
        label="Upload New Poster",
        required=False,
        validators=[FileExtensionValidator(POSTER_EXTENSIONS)],
        widget=forms.ClearableFileInput(attrs={"class": "form-control"}),
    )

    @classmethod
    def for_event(cls, event, *args, **kwargs):
        return cls(*args, initial=event.editable_data(), **kwargs)

    def event_data(self) -> dict:
        """Cleaned values to send to the backend, poster excluded."""
        return {k: v for k, v in self.cleaned_data.items() if k != "poster"}
