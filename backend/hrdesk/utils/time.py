"""Time Utilities - UTC timestamps, organization timezones and display formats"""
from datetime import date, datetime, time, timezone, timedelta, tzinfo
from typing import Optional
from dateutil import parser as date_parser
from dateutil import tz

from ..config.settings import settings
from .logger import get_logger

logger = get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes (MongoDB returns naive UTC values)"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime) -> str:
    """
    Format datetime to ISO 8601 string

    Args:
        dt: Datetime object

    Returns:
        ISO formatted string with Z suffix for UTC
    """
    return as_utc(dt).isoformat().replace("+00:00", "Z")


def parse_iso(iso_string: str) -> datetime:
    """
    Parse ISO 8601 string to datetime

    Args:
        iso_string: ISO formatted datetime string

    Returns:
        Datetime object in UTC
    """
    return as_utc(date_parser.isoparse(iso_string))


# =============================================================================
# Organization timezone helpers
# =============================================================================

def resolve_timezone(name: Optional[str]) -> tzinfo:
    """
    Resolve an IANA timezone name.

    Unknown or empty names fall back to the configured default timezone.
    """
    zone = tz.gettz(name) if name else None
    if zone is None:
        if name:
            logger.warning(f"Unknown timezone '{name}', using {settings.default_timezone}")
        zone = tz.gettz(settings.default_timezone) or timezone.utc
    return zone


def local_date(dt: datetime, zone: tzinfo) -> date:
    """Calendar date of an instant as seen in the given timezone"""
    return as_utc(dt).astimezone(zone).date()


def start_of_day(day: date, zone: tzinfo) -> datetime:
    """Midnight of a local calendar day, expressed in UTC"""
    return datetime.combine(day, time.min, tzinfo=zone).astimezone(timezone.utc)


def day_bounds(day: date, zone: tzinfo) -> tuple:
    """UTC [start, end) bounds of a local calendar day"""
    return start_of_day(day, zone), start_of_day(day + timedelta(days=1), zone)


def year_bounds(year: int, zone: tzinfo) -> tuple:
    """UTC [start, end) bounds of a local calendar year"""
    return start_of_day(date(year, 1, 1), zone), start_of_day(date(year + 1, 1, 1), zone)


def week_start(day: date) -> date:
    """Monday of the week containing ``day`` (a Sunday belongs to the week that began six days earlier)"""
    return day - timedelta(days=day.weekday())


def inclusive_day_count(start: datetime, end: datetime) -> int:
    """
    Number of calendar days covered by a leave, both ends included.

    ``floor((end - start) / 1 day) + 1``: a same-day leave counts as 1.
    """
    elapsed = (as_utc(end) - as_utc(start)).total_seconds()
    return int(elapsed // SECONDS_PER_DAY) + 1


# =============================================================================
# Display formats
# =============================================================================

def format_short_date(dt: datetime, zone: tzinfo) -> str:
    """Format as M/D/YYYY in the given timezone"""
    local = as_utc(dt).astimezone(zone)
    return f"{local.month}/{local.day}/{local.year}"


def format_clock_time(dt: datetime, zone: tzinfo) -> str:
    """Format as hh:MM AM/PM in the given timezone"""
    return as_utc(dt).astimezone(zone).strftime("%I:%M %p")


def format_weekday(day: date) -> str:
    """Short weekday name (Mon, Tue, ...)"""
    return day.strftime("%a")
