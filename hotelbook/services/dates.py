"""Calendar helpers for the booking engine.

Dates travel through the system as zero-padded ``YYYY-MM-DD`` strings, so
plain string comparison orders them chronologically. Day arithmetic goes
through Julian day numbers rather than timestamps, which keeps night counts
free of daylight-saving artifacts and tolerates the permissive day ranges
``validate`` accepts (e.g. ``2025-02-30``).
"""
import re
from datetime import date

INVALID = "invalid"

_ISO_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")
_DMY_RE = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")


def _split_iso(value: str) -> tuple[int, int, int] | None:
    m = _ISO_RE.match(value or "")
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def validate(value: str) -> bool:
    """True for a YYYY-MM-DD triple with year >= 2024, month 1-12 and day 1-31.

    Month lengths and leap years are not checked.
    """
    parts = _split_iso(value)
    if parts is None:
        return False
    y, m, d = parts
    return y >= 2024 and 1 <= m <= 12 and 1 <= d <= 31


def normalize(value: str) -> str:
    """Return ``value`` as zero-padded YYYY-MM-DD, accepting YYYY-MM-DD or DD/MM/YYYY.

    Anything else yields the ``INVALID`` marker.
    """
    parts = _split_iso(value)
    if parts is None:
        m = _DMY_RE.match(value or "")
        if not m:
            return INVALID
        parts = int(m.group(3)), int(m.group(2)), int(m.group(1))
    y, mo, d = parts
    return f"{y:04d}-{mo:02d}-{d:02d}"


def day_number(value: str) -> int:
    """Julian day number of a YYYY-MM-DD string (proleptic Gregorian)."""
    parts = _split_iso(value)
    if parts is None:
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    y, m, d = parts
    a = (14 - m) // 12
    y = y + 4800 - a
    m = m + 12 * a - 3
    return d + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def from_day_number(jdn: int) -> str:
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - 146097 * b // 4
    d = (4 * c + 3) // 1461
    e = c - 1461 * d // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + m // 10
    return f"{year:04d}-{month:02d}-{day:02d}"


def nights_between(check_in: str, check_out: str) -> int:
    return day_number(check_out) - day_number(check_in)


def today_str(today: date | None = None) -> str:
    return (today or date.today()).strftime("%Y-%m-%d")


def is_today_or_future(value: str, today: date | None = None) -> bool:
    return value >= today_str(today)


def week_range(value: str) -> tuple[str, str]:
    """Monday and Sunday of the week containing ``value``."""
    jdn = day_number(normalize(value))
    # JDN mod 7 counts days since Monday
    monday = jdn - jdn % 7
    return from_day_number(monday), from_day_number(monday + 6)
