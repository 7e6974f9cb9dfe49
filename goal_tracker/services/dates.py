from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple

# date.weekday() order; English names regardless of locale
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]

def week_start(day: date) -> date:
    """Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)

def week_bounds(day: date) -> Tuple[date, date]:
    """Sunday-start week containing `day`."""
    start = week_start(day)
    return start, start + timedelta(days=6)

def month_bounds(day: date) -> Tuple[date, date]:
    num_days = monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, num_days)

def year_bounds(day: date) -> Tuple[date, date]:
    return date(day.year, 1, 1), date(day.year, 12, 31)

def period_bounds(day: date, unit: Optional[str]) -> Optional[Tuple[date, date]]:
    if unit == "week":
        return week_bounds(day)
    if unit == "month":
        return month_bounds(day)
    if unit == "year":
        return year_bounds(day)
    return None

def iter_days(start: date, end: date) -> Iterator[date]:
    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)

def ensure_week_in_calendar(day: date) -> date:
    """Reject dates whose Sunday-start week runs past date.min or date.max."""
    try:
        week_bounds(day)
    except OverflowError:
        raise ValueError(f"{day.isoformat()} is too close to the limits of the calendar")
    return day

def days_between(earlier: date, later: date) -> int:
    return (later - earlier).days

def parse_calendar_date(value: str) -> date:
    """
    Parse `yyyy-MM-dd` or an ISO-8601 timestamp into a calendar date.

    Only the date component of a timestamp is significant, taken in the
    server's local time zone when the timestamp carries an offset.
    Raises ValueError on malformed input or a date whose week cannot be
    represented.
    """
    value = value.strip()
    if len(value) == 10:
        return ensure_week_in_calendar(date.fromisoformat(value))
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return ensure_week_in_calendar(moment.date())
