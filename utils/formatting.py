"""Price and date formatting for result cards."""

from datetime import date

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AMD": "֏",
    "RUB": "₽",
}

MONTHS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def format_price(value: float | None, currency: str | None) -> str | None:
    """Format a price without decimals: '$1,250' or 'AED 1,250'."""
    if value is None:
        return None
    code = (currency or "USD").strip().upper()
    amount = f"{round(value):,}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{amount}"
    return f"{code} {amount}"


def parse_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD date, returning None when invalid."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_date(value: str | None) -> str | None:
    """Format a YYYY-MM-DD date as 'Jan 5'; unparseable values pass through."""
    if not value:
        return None
    parsed = parse_date(value)
    if parsed is None:
        return value
    return f"{MONTHS[parsed.month - 1]} {parsed.day}"


def count_nights(check_in: str | None, check_out: str | None) -> int | None:
    """Number of nights between two dates, or None if not positive."""
    start = parse_date(check_in)
    end = parse_date(check_out)
    if start is None or end is None:
        return None
    nights = (end - start).days
    return nights if nights > 0 else None
