from __future__ import annotations

from dataclasses import dataclass

from gpxsplit.errors import InvalidDatetimeError

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * 60
SECONDS_PER_DAY = SECONDS_PER_HOUR * 24

DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# (start, end) byte offsets of YYYY-MM-DDTHH:MM:SS[Z]
_FIELD_SLICES = {
    "year": (0, 4),
    "month": (5, 7),
    "day": (8, 10),
    "hour": (11, 13),
    "minute": (14, 16),
    "second": (17, 19),
}


@dataclass(frozen=True, order=True)
class Timestamp:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


def _parse_unsigned(text: str, field: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise InvalidDatetimeError(f"Invalid {field}: {text!r}")
    return int(text)


def parse_timestamp(value: str | bytes) -> Timestamp:
    """
    Parses a fixed-layout timestamp (YYYY-MM-DDTHH:MM:SS with an optional Z).
    Fields are read from fixed offsets; the delimiter characters are not checked
    and no range validation is applied.
    Args:
        value: ASCII timestamp, 19 or 20 bytes long.
    Returns:
        The parsed Timestamp.
    Raises:
        InvalidDatetimeError: On a wrong length or a non-digit field.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            value = bytes(value).decode("ascii")
        except UnicodeDecodeError:
            raise InvalidDatetimeError(f"Invalid datetime: {value!r}") from None
    elif not value.isascii():
        raise InvalidDatetimeError(f"Datetime must be ASCII: {value!r}")

    if len(value) not in (19, 20):
        raise InvalidDatetimeError(
            f"Datetime must be 19 or 20 characters, got {len(value)}: {value!r}"
        )

    fields = {
        name: _parse_unsigned(value[start:end], name)
        for name, (start, end) in _FIELD_SLICES.items()
    }
    return Timestamp(**fields)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month > 12 or month < 1:
        raise InvalidDatetimeError(f"Invalid month: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_PER_MONTH[month - 1]


def elapsed_seconds(a: Timestamp, b: Timestamp) -> int:
    """
    Seconds between two timestamps, always non-negative.

    Field differences are summed one by one rather than converting to an epoch.
    Month length comes from the earlier timestamp only and the leap-day term
    uses a plain divisible-by-4 rule, so the result is exact only for nearby
    timestamps, which is what consecutive track points are.
    Sizing from the earlier timestamp, whatever the argument order, is what
    keeps the result symmetric in its arguments.
    """
    if b < a:
        a, b = b, a

    difference = (b.year - a.year) * 365 * SECONDS_PER_DAY
    difference += ((b.year + 3) // 4 - (a.year + 3) // 4) * SECONDS_PER_DAY
    difference += (b.month - a.month) * days_in_month(a.year, a.month) * SECONDS_PER_DAY
    difference += (b.day - a.day) * SECONDS_PER_DAY
    difference += (b.hour - a.hour) * SECONDS_PER_HOUR
    difference += (b.minute - a.minute) * SECONDS_PER_MINUTE
    difference += b.second - a.second
    return abs(difference)
