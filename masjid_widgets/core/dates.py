import calendar
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Optional

DEFAULT_TIMEZONE = "Europe/Dublin"

# Ramadan is shown a few days early so the upcoming timetable is labelled correctly
RAMADAN_LEAD_DAYS = 4
RAMADAN_LENGTH_DAYS = 27

# Monthly timetables switch over before the month starts
MONTH_LOOKAHEAD_DAYS = 3


def parse_datetime(value: Any, tz: tzinfo) -> Optional[datetime]:
    """Parse a config value (ISO string or YAML timestamp) as an aware datetime in tz"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def is_ramadan(now: datetime, ramadan_start: Optional[datetime]) -> bool:
    if ramadan_start is None:
        return False
    return (
        now + timedelta(days=RAMADAN_LEAD_DAYS) >= ramadan_start
        and now < ramadan_start + timedelta(days=RAMADAN_LENGTH_DAYS)
    )


def month_name(value: date) -> str:
    return calendar.month_name[value.month]


def upcoming_month_name(now: datetime) -> str:
    return month_name(now + timedelta(days=MONTH_LOOKAHEAD_DAYS))


def format_time_ampm(time24: Any) -> str:
    """'13:05' -> '1:05 pm'; anything unparseable -> ''"""
    if not time24:
        return ""
    parts = str(time24).split(":")
    if len(parts) < 2:
        return ""
    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except ValueError:
        return ""
    period = "pm" if hour >= 12 else "am"
    hour = hour % 12 or 12
    return f"{hour}:{minute:02d} {period}"


def format_clock(value: datetime) -> str:
    """Render a datetime's time of day as '5:30 pm'"""
    return format_time_ampm(f"{value.hour}:{value.minute}")
