import calendar
import threading
from datetime import datetime, timedelta, timezone

from lexaid.utils.errors import ValidationError

_lock = threading.Lock()
_last_issued = None


def server_timestamp():
    """Current UTC time at BSON (millisecond) precision.

    Successive calls never return the same value, so ``last_modified``
    always moves forward and newest-first ordering is total.
    """
    global _last_issued
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    now = now.replace(microsecond=(now.microsecond // 1000) * 1000)
    with _lock:
        if _last_issued is not None and now <= _last_issued:
            now = _last_issued + timedelta(milliseconds=1)
        _last_issued = now
    return now


def add_months(value, months=1):
    """Shift a datetime by calendar months, clamping to the month's last day."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def parse_date(value):
    """Parse an ISO date/datetime string from the API; ``None`` and "" pass through as ``None``."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
