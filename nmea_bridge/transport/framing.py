"""Line framing: raw socket bytes to candidate NMEA sentences.

The wire format is ASCII text, one sentence per line, terminated by ``\\r``
and/or ``\\n``. The framer accumulates characters until a terminator,
discards empty accumulations, trims the result and keeps it only if it starts
with ``$``. Everything else (binary noise, partial lines, chatter from other
protocols on the same port) never reaches the decoder.

Safety bound:
    A character that arrives while the accumulator already holds
    ``max_line_length`` characters resets the accumulator and is dropped.
    The framer does not resynchronize on the next ``$``: the tail of an
    oversized line is emitted as a candidate that normally fails the ``$``
    filter, so the oversized line is lost as a whole. A sentence split
    across two datagrams is rejoined only while it stays within the bound.
"""

__all__ = ["SENTENCE_START", "LineFramer"]

SENTENCE_START = "$"

_TERMINATORS = frozenset("\r\n")


class LineFramer:
    """Stateful splitter turning byte chunks into candidate sentences.

    The accumulator persists across ``feed`` calls, so a stream that splits a
    sentence over two reads is handled transparently.

    Args:
        max_line_length: Maximum characters held before the accumulator is
            reset.

    Example:
        >>> framer = LineFramer(512)
        >>> framer.feed(b"$GPGGA,1,2\\r\\n$GPR")
        ['$GPGGA,1,2']
        >>> framer.feed(b"MC,3\\n")
        ['$GPRMC,3']
    """

    def __init__(self, max_line_length: int) -> None:
        if max_line_length <= 0:
            raise ValueError(f"max_line_length must be positive, got {max_line_length}")
        self._max_line_length = max_line_length
        self._buffer: list[str] = []

    @property
    def pending(self) -> int:
        """Number of characters waiting for a terminator."""
        return len(self._buffer)

    def reset(self) -> None:
        """Drop any partially accumulated line."""
        self._buffer.clear()

    def _take_line(self) -> str | None:
        line = "".join(self._buffer).strip()
        self._buffer.clear()
        if line.startswith(SENTENCE_START):
            return line
        return None

    def feed(self, data: bytes) -> list[str]:
        """Consume *data* and return the sentences it completed, in order."""
        lines: list[str] = []
        # latin-1 maps every byte to exactly one character
        for character in data.decode("latin-1"):
            if character in _TERMINATORS:
                if not self._buffer:
                    continue
                line = self._take_line()
                if line is not None:
                    lines.append(line)
            elif len(self._buffer) < self._max_line_length:
                self._buffer.append(character)
            else:
                self._buffer.clear()
        return lines
