from decimal import Decimal, InvalidOperation

from django import template

register = template.Library()


@register.filter
def peso(value):
    """
    Usage: {{ event.ticket_price_regular|peso }}
    Renders ``1299`` as ``₱1,299`` and ``80.5`` as ``₱80.50``.
    """
    if value in (None, ""):
        return ""
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return value
    if amount == amount.to_integral_value():
        return f"₱{amount:,.0f}"
    return f"₱{amount:,.2f}"
