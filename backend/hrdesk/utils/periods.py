"""Pay period parsing for free-text assistant queries"""
import re
from typing import Optional

MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]

_NUMERIC_PERIOD = re.compile(r"(\d{4})[-/ ]?(\d{1,2})")
_NAMED_PERIOD = re.compile(r"([A-Za-z]+)\s*(\d{4})")


class PeriodParseError(ValueError):
    """Text names a period that cannot be turned into YYYY-MM"""


def month_number(text: str) -> Optional[int]:
    """
    Month number for text containing an English month name.

    Matching is a case-insensitive substring test in calendar order, so
    "June 2025" and "junE" both give 6.
    """
    lowered = text.lower()
    for index, name in enumerate(MONTH_NAMES):
        if name in lowered:
            return index + 1
    return None


def names_month(text: str) -> bool:
    """True when one of the words in ``text`` is exactly a month name"""
    return any(word in MONTH_NAMES for word in re.findall(r"[a-z]+", text.lower()))


def _format_period(year: str, month: int) -> str:
    if not 1 <= month <= 12:
        raise PeriodParseError(f"Month {month} is out of range")
    return f"{year}-{month:02d}"


def parse_pay_period(text: str) -> Optional[str]:
    """
    Extract a pay period (``YYYY-MM``) from free text.

    Accepts ``YYYY-MM``, ``YYYY/MM``, ``YYYY MM``, ``YYYYMM`` and
    ``<MonthName> YYYY``. Returns None when the text mentions no period.

    Raises:
        PeriodParseError: a period is present but does not name a real month
    """
    numeric = _NUMERIC_PERIOD.search(text)
    if numeric:
        return _format_period(numeric.group(1), int(numeric.group(2)))

    named = _NAMED_PERIOD.search(text)
    if named:
        number = month_number(named.group(1))
        if number is None:
            raise PeriodParseError(f"'{named.group(1)}' is not a month")
        return _format_period(named.group(2), number)

    return None
