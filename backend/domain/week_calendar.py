"""
Business Week Calendar

Orders are grouped into fixed 7-day business weeks running Friday through
Thursday. A week is identified by "YYYYMMDD_YYYYMMDD" (start and end date),
which sorts lexicographically in chronological order.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from constants import WeekFormat


@dataclass(frozen=True)
class WeekRange:
    """Identifier and display label of one business week."""

    week_id: str
    label: str
    start: date
    end: date


def _to_local(timestamp: datetime) -> datetime:
    # Naive datetimes are already local wall time.
    if timestamp.tzinfo is not None:
        return timestamp.astimezone().replace(tzinfo=None)
    return timestamp


def start_of_business_week(timestamp: datetime) -> datetime:
    """Midnight of the most recent Friday at or before ``timestamp``."""
    local = _to_local(timestamp)
    offset = WeekFormat.DAYS_SINCE_FRIDAY[local.weekday()]
    start = local - timedelta(days=offset)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def _format_label(start: date, end: date) -> str:
    return (
        f"{start.strftime(WeekFormat.LABEL_DATE_FORMAT)}"
        f"{WeekFormat.LABEL_SEPARATOR}"
        f"{end.strftime(WeekFormat.LABEL_DATE_FORMAT)}"
    )


def week_range_for(timestamp: datetime) -> WeekRange:
    """
    Compute the business week a timestamp belongs to.

    Args:
        timestamp: Any datetime; aware values are converted to local time

    Returns:
        WeekRange with the week id, label and start/end dates
    """
    start = start_of_business_week(timestamp).date()
    end = start + timedelta(days=WeekFormat.DAYS_PER_WEEK - 1)
    week_id = (
        f"{start.strftime(WeekFormat.ID_DATE_FORMAT)}"
        f"{WeekFormat.ID_SEPARATOR}"
        f"{end.strftime(WeekFormat.ID_DATE_FORMAT)}"
    )
    return WeekRange(week_id=week_id, label=_format_label(start, end), start=start, end=end)


def current_week_range(now: Optional[datetime] = None) -> WeekRange:
    """Business week of ``now`` (defaults to the current instant)."""
    return week_range_for(now if now is not None else datetime.now())


def _parse_id_date(token: str) -> Optional[date]:
    if len(token) != 8 or not token.isdigit():
        return None
    try:
        return datetime.strptime(token, WeekFormat.ID_DATE_FORMAT).date()
    except ValueError:
        return None


def label_from_week_id(week_id: str) -> str:
    """
    Rebuild the display label from a week id.

    Ids that do not hold exactly two valid dates are returned unchanged.
    """
    parts = week_id.split(WeekFormat.ID_SEPARATOR)
    if len(parts) != 2:
        return week_id
    start = _parse_id_date(parts[0])
    end = _parse_id_date(parts[1])
    if start is None or end is None:
        return week_id
    return _format_label(start, end)
