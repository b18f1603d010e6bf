"""Sentence decoder: one text line plus the previous fix in, new fix out.

``decode`` is the entry point used by the aggregator. It is pure and total:
it performs no I/O besides DEBUG logging, keeps no state, and never raises.
Anything it cannot use (unknown sentence kinds, void or no-fix sentences,
short or corrupted lines) yields the previous fix object unchanged, so a
single bad frame never stops the stream or damages fields already known.

Any two-letter talker ID is accepted (``GP``, ``GN``, ``GL``, ``GA``, ...)
as long as the kind code is ``RMC`` or ``GGA``.
"""

import logging
import re
from collections.abc import Callable

from nmea_bridge.nmea import gga, rmc
from nmea_bridge.nmea.checksum import split_checksum, validate_checksum
from nmea_bridge.nmea.types import Fix, SentenceKind

__all__ = ["classify", "decode"]

logger = logging.getLogger(__name__)

_SENTENCE_ID = re.compile(r"^\$[A-Z]{2}(?P<kind>[A-Z]{3})(?=[,*]|$)")

_Apply = Callable[[list[str], Fix, str], Fix]

# Kind -> (minimum field count including the sentence id, merge function)
_DECODERS: dict[SentenceKind, tuple[int, _Apply]] = {
    SentenceKind.POSITION_VELOCITY: (rmc.MINIMUM_FIELD_COUNT, rmc.apply_rmc),
    SentenceKind.POSITION_QUALITY: (gga.MINIMUM_FIELD_COUNT, gga.apply_gga),
}


def classify(line: str) -> SentenceKind | None:
    """Return the kind of a sentence, or None if it is not RMC or GGA.

    Example:
        >>> classify("$GNGGA,123519,...")
        <SentenceKind.POSITION_QUALITY: 'GGA'>
        >>> classify("$GPGSV,3,1,11,...") is None
        True
    """
    match = _SENTENCE_ID.match(line.strip())
    if match is None:
        return None
    try:
        return SentenceKind(match.group("kind"))
    except ValueError:
        return None


def decode(line: str, previous: Fix, verify_checksum: bool = False) -> Fix:
    """Decode one sentence and merge it into *previous*.

    Args:
        line: One NMEA sentence, with or without surrounding whitespace.
        previous: The fix to derive from. Fields the sentence does not carry
            keep their values.
        verify_checksum: Discard sentences whose ``*hh`` checksum is missing
            or wrong. Off by default: many phone bridges send sentences
            without one.

    Returns:
        A new ``Fix`` if the sentence updated the position, otherwise
        *previous* itself.

    Example:
        >>> fix = decode("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A", Fix())
        >>> fix.speed_knots, fix.course_degrees
        (22.4, 84.4)
    """
    sentence = line.strip()
    kind = classify(sentence)
    if kind is None:
        return previous

    if verify_checksum and not validate_checksum(sentence):
        logger.debug("Discarding sentence with bad checksum: %r", sentence)
        return previous

    body, _ = split_checksum(sentence)
    fields = body[1:].split(",")
    minimum_field_count, apply = _DECODERS[kind]
    if len(fields) < minimum_field_count:
        logger.debug(
            "Discarding short %s sentence (%d fields): %r",
            kind.value,
            len(fields),
            sentence,
        )
        return previous

    try:
        return apply(fields, previous, sentence)
    except (ValueError, IndexError) as e:
        logger.debug("Discarding malformed %s sentence %r: %s", kind.value, sentence, e)
        return previous
