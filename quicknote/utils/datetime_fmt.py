"""Date prefix formatting for note file names."""

from __future__ import annotations

from datetime import date

# Fixed "DD-Mon-YYYY" prefix, e.g. "07-Mar-2025". Month names come from this
# table rather than strftime("%b") so the prefix does not depend on the locale.
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

DATE_PREFIX_LEN = 11


def format_date_prefix(day: date) -> str:
    """Return ``day`` rendered as a note date prefix.

    Example: ``date(2025, 3, 7)`` -> ``"07-Mar-2025"``
    """

    return f"{day.day:02d}-{_MONTHS[day.month - 1]}-{day.year:04d}"


def today_prefix() -> str:
    """Return the local current date as a note date prefix."""

    return format_date_prefix(date.today())


def parse_date_prefix(name: str) -> date | None:
    """Parse the leading ``DD-Mon-YYYY`` of ``name``.

    Returns ``None`` when the name is too short or the prefix is not a valid
    calendar date.
    """

    if len(name) < DATE_PREFIX_LEN:
        return None

    prefix = name[:DATE_PREFIX_LEN]
    day_raw, month_raw, year_raw = prefix[0:2], prefix[3:6], prefix[7:11]
    if prefix[2] != "-" or prefix[6] != "-":
        return None
    if not (prefix.isascii() and day_raw.isdigit() and year_raw.isdigit()):
        return None
    if month_raw not in _MONTHS:
        return None

    try:
        return date(int(year_raw), _MONTHS.index(month_raw) + 1, int(day_raw))
    except ValueError:
        return None
