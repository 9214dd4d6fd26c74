from datetime import date, datetime

from expense_client.utils.dates import date_part, to_datetime
from expense_client.utils.formatting import format_currency, format_date


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(0) == "$0.00"
    assert format_currency(None) == "$0.00"
    assert format_currency(-3) == "-$3.00"


def test_format_date():
    assert format_date("2024-01-01") == "Jan 1, 2024"
    assert format_date("2024-12-25T00:00:00.000Z") == "Dec 25, 2024"
    assert format_date(date(2023, 7, 4)) == "Jul 4, 2023"
    assert format_date("someday") == "someday"


def test_to_datetime_normalizes_to_naive_utc():
    assert to_datetime("2024-01-01T02:00:00+02:00") == datetime(2024, 1, 1, 0, 0)
    assert to_datetime("") is None
    assert to_datetime(None) is None
    assert to_datetime("31/01/2024") is None


def test_date_part():
    assert date_part("2024-03-09T15:00:00Z") == "2024-03-09"
    assert date_part("garbage") == "garbage"
