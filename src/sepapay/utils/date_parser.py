"""Date parsing utilities."""

from datetime import date, datetime, timedelta, timezone
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, weekday, MO, TU, WE, TH, FR, SA, SU

WEEKDAYS: dict[str, weekday] = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse an execution date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "tomorrow", "next friday", "next month"

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text == "today":
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)

    if text.startswith("next "):
        period = text[5:]
        if period == "week":
            return today + relativedelta(days=1, weekday=MO)
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        if period in WEEKDAYS:
            # Strictly after today, even when today is that weekday
            return today + relativedelta(days=1, weekday=WEEKDAYS[period])

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def format_creation_timestamp(moment: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with milliseconds, e.g. 2024-01-15T09:30:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
