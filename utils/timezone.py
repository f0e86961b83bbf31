"""UTC clock and calendar-date parsing for report periods and due dates."""

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def epoch_millis(dt: datetime | None = None) -> int:
    """
    Milliseconds since the Unix epoch.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt is None:
        dt = now_utc()
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime. Datetime must be timezone-aware."
        )
    return int(dt.timestamp() * 1000)


def parse_date(value: str | date) -> date:
    """
    Parse a calendar date.

    Accepts a date, a plain ISO date ("2024-03-31") or an ISO datetime whose
    date part is used ("2024-03-31T00:00:00Z"), which is how the backend
    returns due dates.

    Raises ValueError for empty or malformed input.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = (value or "").strip()
    if not text:
        raise ValueError("Date is required")

    try:
        return date.fromisoformat(text.split("T")[0])
    except ValueError:
        raise ValueError(f"Invalid date '{value}'. Use YYYY-MM-DD.")
