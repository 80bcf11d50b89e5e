from datetime import UTC, date, datetime


def utc_noon(day: date) -> datetime:
    """Calendar dates are stored at 12:00 UTC so no local offset shifts the day."""
    return datetime(day.year, day.month, day.day, 12, 0, tzinfo=UTC)
