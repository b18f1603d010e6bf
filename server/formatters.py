"""JSON formatting utilities for position fixes."""

import json
from typing import Any

from nmea_bridge import Fix

__all__ = ["fix_to_dict", "format_fix_message"]


def fix_to_dict(fix: Fix) -> dict[str, Any]:
    """Flatten a fix into JSON-compatible values."""
    return {
        "type": "fix",
        "valid": fix.valid,
        "lat": fix.latitude_degrees,
        "lon": fix.longitude_degrees,
        "alt": fix.altitude_meters,
        "num_satellites": fix.num_satellites,
        "hdop": fix.horizontal_dilution_of_precision,
        "speed_knots": fix.speed_knots,
        "course_degrees": fix.course_degrees,
        "utc_time": fix.utc_time.isoformat() if fix.utc_time else None,
    }


def format_fix_message(fix: Fix) -> str:
    """Serialize a fix into a JSON string for WebSocket transmission."""
    return json.dumps(fix_to_dict(fix))
