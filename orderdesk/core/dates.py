"""Calendar-day helpers shared by validation and ranking."""

from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo

from orderdesk.config import get_settings


def business_zone(name: str | None = None) -> tzinfo:
    """Timezone that defines day boundaries for the business."""
    return ZoneInfo(name or get_settings().business_timezone)


def business_today(zone: tzinfo | None = None) -> date:
    """Today's date in the business timezone."""
    return datetime.now(zone or business_zone()).date()


def to_calendar_date(value: date | str, zone: tzinfo | None = None) -> date | None:
    """
    Reduce a date, datetime or ISO string to a calendar day.

    Aware datetimes are converted to the business timezone first so that a
    late-evening UTC timestamp lands on the right local day. Returns None if
    the value cannot be parsed.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is not None:
        moment = moment.astimezone(zone or business_zone())
    return moment.date()


def days_until(target: date, today: date) -> int:
    """Whole days from ``today`` to ``target``; negative when overdue."""
    return (target - today).days
