"""
Local-calendar date keys.

Every journal entry is keyed by the user's local date (YYYY-MM-DD), never
UTC, so a session logged just before midnight lands on the right day.
"""

import re
from datetime import date, datetime

_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def to_local_date_key(moment: datetime | date | None = None) -> str:
    """
    Format a moment as a local YYYY-MM-DD key.

    Args:
        moment: Naive local datetime or date; defaults to now (local time)

    Returns:
        Date key string
    """
    if moment is None:
        moment = datetime.now()
    elif isinstance(moment, datetime) and moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def from_local_date_key(key: str) -> date:
    """
    Parse a YYYY-MM-DD key back into a date.

    Missing parts default to 1970-01-01 the way a lenient reader would.
    """
    parts = [int(p) if p.isdigit() else 0 for p in key.split("-")]
    year = parts[0] if len(parts) > 0 and parts[0] else 1970
    month = parts[1] if len(parts) > 1 and parts[1] else 1
    day = parts[2] if len(parts) > 2 and parts[2] else 1
    return date(year, month, day)


def is_date_key(value: object) -> bool:
    """True if value is a well-formed, real calendar date key."""
    if not isinstance(value, str) or not _DATE_KEY_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def month_key(moment: date) -> str:
    """YYYY-MM for the month containing moment."""
    return f"{moment.year:04d}-{moment.month:02d}"
