from expense_client.utils.dates import to_datetime


def format_currency(amount) -> str:
    """Format an amount as US dollars, e.g. ``$1,234.50``."""
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value) -> str:
    """Format a stored date as ``Jan 1, 2024``; unparseable input is returned as-is."""
    parsed = to_datetime(value)
    if parsed is None:
        return str(value or "")
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
