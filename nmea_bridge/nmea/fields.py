"""NMEA field parsing utilities.

NMEA fields are comma-separated and may be empty (consecutive commas mean
"no data"). The helpers here make the distinction the decoder relies on:

* an empty field parses to ``None`` so the caller can keep the value it
  already has;
* a non-empty field that cannot be parsed raises ``FieldError`` so the
  caller can throw the whole sentence away.

Nothing here falls back to zero: a corrupted frame must not leak
half-parsed values into an otherwise good fix.
"""

import math
from datetime import date, datetime, time, timezone

__all__ = [
    "UNKNOWN_DATE",
    "FieldError",
    "combine_utc",
    "degrees_minutes_to_decimal",
    "parse_date",
    "parse_float_field",
    "parse_int_field",
    "parse_time_of_day",
]

# Hemisphere letter -> sign of the decimal degrees
_HEMISPHERE_SIGN = {"N": 1.0, "E": 1.0, "S": -1.0, "W": -1.0}

# Two-digit years in the RMC date field are offset from 2000
_CENTURY = 2000

# GGA carries no date; used until an RMC sentence has supplied one
UNKNOWN_DATE = date.min


class FieldError(ValueError):
    """A non-empty NMEA field could not be parsed."""


def parse_float_field(value: str) -> float | None:
    """Parse a decimal field.

    Example:
        >>> parse_float_field("022.4")
        22.4
        >>> parse_float_field("")  # empty field
        None

    Raises:
        FieldError: If the field is non-empty and not a finite number.
    """
    if not value:
        return None
    try:
        result = float(value)
    except ValueError as e:
        raise FieldError(f"not a number: {value!r}") from e
    if not math.isfinite(result):
        raise FieldError(f"not a finite number: {value!r}")
    return result


def parse_int_field(value: str) -> int | None:
    """Parse an integer field such as fix quality or satellite count.

    Raises:
        FieldError: If the field is non-empty and not an integer.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise FieldError(f"not an integer: {value!r}") from e


def degrees_minutes_to_decimal(value: str, hemisphere: str) -> float:
    """Convert an NMEA coordinate (``DDMM.MMMM`` / ``DDDMM.MMMM``) to degrees.

    The integer degrees are the value divided by 100 and truncated, the
    remainder is minutes::

        decimal = degrees + minutes / 60

    The result is negated for the ``S`` and ``W`` hemispheres.

    Args:
        value: Coordinate field, e.g. ``"4807.038"``.
        hemisphere: ``"N"``, ``"S"``, ``"E"`` or ``"W"``.

    Returns:
        Signed decimal degrees.

    Raises:
        FieldError: If either field is empty or malformed.

    Example:
        >>> degrees_minutes_to_decimal("4807.038", "N")
        48.1173...  # 48° + 7.038'/60
        >>> degrees_minutes_to_decimal("01131.000", "W")
        -11.5166...  # negative for West
    """
    raw = parse_float_field(value)
    if raw is None:
        raise FieldError("empty coordinate")
    sign = _HEMISPHERE_SIGN.get(hemisphere)
    if sign is None:
        raise FieldError(f"bad hemisphere: {hemisphere!r}")

    degrees = int(raw / 100)
    minutes = raw - degrees * 100
    return sign * (degrees + minutes / 60.0)


def parse_time_of_day(value: str) -> time | None:
    """Parse ``hhmmss[.sss]`` into a ``datetime.time``.

    Fractional seconds are kept to microsecond resolution.

    Raises:
        FieldError: If the field is non-empty and not a valid time of day.
    """
    if not value:
        return None
    whole, _, fraction = value.partition(".")
    if len(whole) != 6 or not whole.isdigit():
        raise FieldError(f"bad time of day: {value!r}")
    if fraction and not fraction.isdigit():
        raise FieldError(f"bad time of day: {value!r}")

    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    try:
        return time(
            int(whole[0:2]),
            int(whole[2:4]),
            int(whole[4:6]),
            microsecond,
        )
    except ValueError as e:
        raise FieldError(f"bad time of day: {value!r}") from e


def parse_date(value: str) -> date | None:
    """Parse the RMC ``ddmmyy`` date field.

    Example:
        >>> parse_date("230394")
        datetime.date(2094, 3, 23)

    Raises:
        FieldError: If the field is non-empty and not a valid date.
    """
    if not value:
        return None
    if len(value) != 6 or not value.isdigit():
        raise FieldError(f"bad date: {value!r}")
    try:
        return date(
            int(value[4:6]) + _CENTURY,
            int(value[2:4]),
            int(value[0:2]),
        )
    except ValueError as e:
        raise FieldError(f"bad date: {value!r}") from e


def combine_utc(day: date, time_of_day: time) -> datetime:
    """Join a date and a time of day into a timezone-aware UTC timestamp."""
    return datetime.combine(day, time_of_day, tzinfo=timezone.utc)
