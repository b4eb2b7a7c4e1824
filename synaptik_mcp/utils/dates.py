"""Date helpers: TaskWarrior-style date expressions and stored date strings."""

import calendar
import re
from datetime import datetime, timedelta

from dateutil import parser as dateutil_parser

from synaptik_mcp.errors import InvalidDateError

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DAYS_OFFSET = re.compile(r"^(\d+)d$")
_WEEKS_OFFSET = re.compile(r"^(\d+)w$")

MIN_PLAUSIBLE_YEAR = 2000
MAX_PLAUSIBLE_YEAR = 2100


def to_local_naive(dt: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def start_of_day(dt: datetime) -> datetime:
    """Midnight of the local calendar day containing ``dt``."""
    return to_local_naive(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def parse_stored_date(value: str) -> datetime:
    """
    Parse an ISO-8601 string as stored on a task.

    Raises:
        ValueError: if the string is not ISO-8601
    """
    return to_local_naive(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def format_stored_date(dt: datetime) -> str:
    return to_local_naive(dt).isoformat()


def is_plausible_date(value: str) -> bool:
    """True when ``value`` parses and falls within the years 2000-2100."""
    try:
        parsed = parse_stored_date(value)
    except (TypeError, ValueError):
        return False
    return MIN_PLAUSIBLE_YEAR <= parsed.year <= MAX_PLAUSIBLE_YEAR


def resolve_date(expr: str, now: datetime) -> datetime:
    """
    Resolve a TaskWarrior-style date expression against a reference time.

    Supported forms: today, tomorrow, yesterday, weekday names (next
    occurrence, never today), eom, eoy, YYYY-MM-DD, <N>d and <N>w. Anything
    else goes through python-dateutil.

    Args:
        expr: Date expression (case-insensitive)
        now: Reference time

    Returns:
        Naive local datetime

    Raises:
        InvalidDateError: if the expression cannot be resolved
    """
    text = expr.strip().lower()
    now = to_local_naive(now)
    today = start_of_day(now)

    if text == "today":
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)
    if text == "yesterday":
        return today - timedelta(days=1)
    if text in WEEKDAYS:
        return _next_weekday(text, now)
    if text == "eom":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=last_day)
    if text == "eoy":
        return today.replace(month=12, day=31)

    if _ISO_DAY.match(text):
        try:
            return datetime.strptime(text, "%Y-%m-%d")
        except ValueError as e:
            raise InvalidDateError(expr) from e
    offset = _DAYS_OFFSET.match(text) or _WEEKS_OFFSET.match(text)
    if offset:
        days = int(offset.group(1)) * (7 if text.endswith("w") else 1)
        try:
            return today + timedelta(days=days)
        except OverflowError as e:
            raise InvalidDateError(expr) from e

    if not text:
        raise InvalidDateError(expr)
    try:
        return to_local_naive(dateutil_parser.parse(expr))
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(expr) from e


def _next_weekday(day: str, now: datetime) -> datetime:
    # Same weekday as today means next week, keeping the time of day.
    offset = (WEEKDAYS.index(day) - now.weekday()) % 7
    if offset == 0:
        offset = 7
    return now + timedelta(days=offset)
