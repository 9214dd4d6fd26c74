from datetime import date, datetime, timezone
from typing import Optional

from dateutil import parser as date_parser


def to_datetime(value) -> Optional[datetime]:
    """
    Normalize an expense or criteria date to a naive UTC datetime.

    Accepts ``date``/``datetime`` objects and ISO-8601 strings such as
    ``2024-01-01`` or ``2024-01-01T00:00:00.000Z``. Returns None when the
    value is empty or unparseable.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def today_iso() -> str:
    return date.today().isoformat()


def date_part(value) -> str:
    """The ``YYYY-MM-DD`` part of a stored date, for pre-filling forms."""
    parsed = to_datetime(value)
    if parsed is None:
        return str(value or "").split("T")[0]
    return parsed.date().isoformat()
