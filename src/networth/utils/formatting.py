"""Display formatting for money values."""

from decimal import Decimal, ROUND_HALF_UP


def format_currency(amount: Decimal, places: int = 0) -> str:
    """Format an amount as dollars, e.g. ``$1,234`` or ``-$12.50``."""
    if not amount.is_finite():
        return "n/a"
    quantum = Decimal(1).scaleb(-places)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.{places}f}"


def format_short_currency(amount: Decimal) -> str:
    """Abbreviate large amounts: 1500 -> "2k", 2_400_000 -> "2M"."""
    if not amount.is_finite():
        return "n/a"
    magnitude = abs(amount)
    for threshold, suffix in ((10**9, "B"), (10**6, "M"), (10**3, "k")):
        if magnitude >= threshold:
            scaled = (amount / threshold).quantize(Decimal(1), rounding=ROUND_HALF_UP)
            return f"{scaled}{suffix}"
    return str(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))
