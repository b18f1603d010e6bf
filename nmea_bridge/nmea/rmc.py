"""RMC sentence decoding (position, velocity and date).

RMC (Recommended Minimum Specific GNSS Data) is the only one of the two
supported sentences that carries speed, course and the calendar date.

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
           |      | |        | |         | |     |     |      |
           |      | |        | |         | |     |     |      +-- Magnetic variation (ignored)
           |      | |        | |         | |     |     +-- Date (ddmmyy)
           |      | |        | |         | |     +-- Course over ground (degrees true)
           |      | |        | |         | +-- Speed over ground (knots)
           |      | |        | +---------+-- Longitude + E/W
           |      | +--------+-- Latitude + N/S
           |      +-- Status (A=active, V=void)
           +-- UTC time (hhmmss[.sss])
"""

import dataclasses
from datetime import datetime

from nmea_bridge.nmea.fields import (
    UNKNOWN_DATE,
    combine_utc,
    degrees_minutes_to_decimal,
    parse_date,
    parse_float_field,
    parse_time_of_day,
)
from nmea_bridge.nmea.types import Fix

__all__ = ["MINIMUM_FIELD_COUNT", "apply_rmc"]

# Sentence id plus the nine fields up to and including the date
MINIMUM_FIELD_COUNT = 10

_STATUS_ACTIVE = "A"


def _utc_time(fields: list[str], previous: Fix) -> datetime | None:
    """Timestamp from the time and date fields, or the previous one if no time."""
    time_of_day = parse_time_of_day(fields[1])
    day = parse_date(fields[9])
    if time_of_day is None:
        return previous.utc_time
    if day is None:
        day = previous.utc_time.date() if previous.utc_time else UNKNOWN_DATE
    return combine_utc(day, time_of_day)


def apply_rmc(fields: list[str], previous: Fix, sentence: str) -> Fix:
    """Merge an RMC sentence into *previous*.

    Only latitude, longitude, speed, course and time are touched; altitude,
    satellite count and HDOP are carried over unchanged. Empty speed or
    course fields (common while stationary) keep their previous values.

    Args:
        fields: Comma-separated fields with the checksum already removed.
            Must hold at least ``MINIMUM_FIELD_COUNT`` items.
        previous: The fix to derive from.
        sentence: Raw sentence text recorded as ``last_sentence``.

    Returns:
        The merged fix, or *previous* itself if the status is not active.

    Raises:
        FieldError: If any field carried by the sentence is malformed.
    """
    if fields[2] != _STATUS_ACTIVE:
        return previous

    latitude = degrees_minutes_to_decimal(fields[3], fields[4])
    longitude = degrees_minutes_to_decimal(fields[5], fields[6])
    speed = parse_float_field(fields[7])
    course = parse_float_field(fields[8])

    return dataclasses.replace(
        previous,
        valid=True,
        latitude_degrees=latitude,
        longitude_degrees=longitude,
        speed_knots=previous.speed_knots if speed is None else speed,
        course_degrees=previous.course_degrees if course is None else course,
        utc_time=_utc_time(fields, previous),
        last_sentence=sentence,
    )
