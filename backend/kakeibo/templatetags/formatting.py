from decimal import Decimal, InvalidOperation

from django import template

register = template.Library()


@register.filter
def currency(value):
    """
    Format a whole-yen amount with thousands separators.
    """
    if value is None:
        return "¥0"
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return "¥0"
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    return f"{sign}¥{amount:,.0f}"
