"""NMEA checksum handling.

Every NMEA 0183 sentence may end with ``*hh``: the XOR of all characters
between ``$`` and ``*`` (exclusive) as two hexadecimal digits. Phone bridges
usually send it, but the decoder only enforces it when asked to.

Example sentence structure:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
    ^                       checksum content                          ^^
    start                                                  checksum (0x6A)
"""

__all__ = ["compute_checksum", "split_checksum", "validate_checksum"]


def compute_checksum(content: str) -> int:
    """XOR the character codes of *content* (the text between ``$`` and ``*``).

    Example:
        >>> hex(compute_checksum("GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W"))
        '0x6a'
    """
    result = 0
    for character in content:
        result ^= ord(character)
    return result


def split_checksum(sentence: str) -> tuple[str, str | None]:
    """Split a trimmed sentence into its body and the checksum digits.

    The body keeps the leading ``$``. Only the first ``*`` counts; anything
    after the two checksum digits is ignored.

    Returns:
        ``(body, digits)`` where *digits* is ``None`` if the sentence has no
        ``*`` delimiter.

    Example:
        >>> split_checksum("$GPGGA,1,2*4F")
        ('$GPGGA,1,2', '4F')
        >>> split_checksum("$GPGGA,1,2")
        ('$GPGGA,1,2', None)
    """
    star = sentence.find("*")
    if star < 0:
        return sentence, None
    return sentence[:star], sentence[star + 1 : star + 3]


def validate_checksum(sentence: str) -> bool:
    """Return True if *sentence* carries a checksum that matches its content.

    Sentences without ``$``, without ``*``, with a truncated or
    non-hexadecimal checksum all fail validation.
    """
    sentence = sentence.strip()
    if not sentence.startswith("$"):
        return False

    body, digits = split_checksum(sentence)
    if digits is None or len(digits) != 2:
        return False

    try:
        return compute_checksum(body[1:]) == int(digits, 16)
    except ValueError:
        return False
