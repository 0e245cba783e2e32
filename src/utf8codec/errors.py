"""Exceptions raised by utf8codec in strict mode."""

from __future__ import annotations

from utf8codec.enums import ErrorKind


class Utf8Error(ValueError):
    """Malformed input found while encoding or decoding in strict mode.

    :param kind: What was wrong with the input.
    :param position: Index of the offending code point (encode) or of the
        byte at which the problem was detected (decode), within the sequence
        passed to the failing call.  ``None`` when the problem is only known
        at end of stream.
    :param value: The offending code point, byte, or partially decoded value.
    """

    def __init__(self, kind: ErrorKind, position: int | None, value: int) -> None:
        self.kind = kind
        self.position = position
        self.value = value
        where = "end of stream" if position is None else f"position {position}"
        super().__init__(f"{kind.value} 0x{value:X} at {where}")
