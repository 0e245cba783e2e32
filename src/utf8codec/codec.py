"""Streaming UTF-8 encoder and decoder."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from utf8codec._utils import (
    MAX_CODE_POINT,
    REPLACEMENT_BYTES,
    REPLACEMENT_CHARACTER,
    _as_bytes,
    _validate_errors,
    is_surrogate,
)
from utf8codec.enums import ErrorKind, ErrorMode
from utf8codec.errors import Utf8Error

# Lead byte ranges: (first, last, payload mask, continuation bytes expected,
# smallest code point the sequence may legitimately carry).
_LEAD_BYTES: tuple[tuple[int, int, int, int, int], ...] = (
    (0xC0, 0xDF, 0x1F, 1, 0x80),
    (0xE0, 0xEF, 0x0F, 2, 0x800),
    (0xF0, 0xF7, 0x07, 3, 0x10000),
)


class Utf8:
    """Converts between code point sequences and UTF-8 bytes.

    Encoding is stateless.  Decoding is incremental: a multi-byte sequence
    may be split across any number of :meth:`decode` calls, and the partial
    sequence is carried over in the instance.  Use one instance per stream.

    By default malformed input is replaced with U+FFFD and neither direction
    ever raises.  With ``errors="strict"`` a :class:`Utf8Error` is raised
    instead of substituting.
    """

    def __init__(self, errors: ErrorMode | str = ErrorMode.REPLACE) -> None:
        """Initialize the codec.

        :param errors: :attr:`ErrorMode.REPLACE` (the default) substitutes
            the replacement character for malformed input;
            :attr:`ErrorMode.STRICT` raises :class:`Utf8Error`.
        :raises ValueError: If *errors* is not a known error mode.
        """
        self._errors = _validate_errors(errors)
        self._pending_value = 0
        self._pending_remaining = 0
        self._pending_minimum = 0
        self.logger = logging.getLogger(__name__)

    def encode(self, code_points: Iterable[int] | str) -> bytes:
        """Encode a sequence of code points as UTF-8.

        Surrogates (U+D800 to U+DFFF) and values outside 0 to U+10FFFF are
        encoded as the replacement character ``EF BF BD``.

        :param code_points: The code points to encode.  A ``str`` is taken
            as the code points of its characters.
        :returns: The concatenated UTF-8 encoding.
        :raises Utf8Error: In strict mode, on the first invalid code point.
        """
        if isinstance(code_points, str):
            code_points = map(ord, code_points)
        encoding = bytearray()
        for index, code_point in enumerate(code_points):
            if code_point < 0 or code_point > MAX_CODE_POINT:
                self._substitute(ErrorKind.CODE_POINT_OUT_OF_RANGE, index, code_point)
                encoding += REPLACEMENT_BYTES
                continue
            if is_surrogate(code_point):
                self._substitute(ErrorKind.SURROGATE_CODE_POINT, index, code_point)
                encoding += REPLACEMENT_BYTES
                continue

            num_bits = code_point.bit_length()
            if num_bits <= 7:
                encoding.append(code_point)
            elif num_bits <= 11:
                encoding.append(0xC0 | ((code_point >> 6) & 0x1F))
                encoding.append(0x80 | (code_point & 0x3F))
            elif num_bits <= 16:
                encoding.append(0xE0 | ((code_point >> 12) & 0x0F))
                encoding.append(0x80 | ((code_point >> 6) & 0x3F))
                encoding.append(0x80 | (code_point & 0x3F))
            else:
                encoding.append(0xF0 | ((code_point >> 18) & 0x07))
                encoding.append(0x80 | ((code_point >> 12) & 0x3F))
                encoding.append(0x80 | ((code_point >> 6) & 0x3F))
                encoding.append(0x80 | (code_point & 0x3F))
        return bytes(encoding)

    def decode(
        self, data: bytes | bytearray | memoryview | str | Iterable[int]
    ) -> list[int]:
        """Decode the next chunk of a UTF-8 byte stream.

        Only code points completed within this chunk are returned; a
        trailing partial sequence is kept for the next call.

        In replace mode every byte that cannot start a sequence yields one
        U+FFFD, and any byte received mid-sequence is taken as a
        continuation byte without checking its form.  Decoded values are
        not range-checked.

        :param data: The next chunk of bytes.  A ``str`` is taken as narrow
            8-bit characters, one byte per character.
        :returns: The code points completed by this chunk.
        :raises Utf8Error: In strict mode, on the first malformed byte or
            invalid decoded value.  The partial sequence is discarded first.
        :raises ValueError: If a ``str`` holds characters above U+00FF.
        """
        strict = self._errors is ErrorMode.STRICT
        code_points: list[int] = []
        for position, byte in enumerate(_as_bytes(data)):
            if self._pending_remaining:
                if strict and byte & 0xC0 != 0x80:
                    self._fail(ErrorKind.TRUNCATED_SEQUENCE, position, byte)
                self._pending_value = (self._pending_value << 6) | (byte & 0x3F)
                self._pending_remaining -= 1
                if self._pending_remaining == 0:
                    value = self._pending_value
                    if strict:
                        self._check_decoded(value, position)
                    self._pending_value = 0
                    code_points.append(value)
                continue

            if byte < 0x80:
                code_points.append(byte)
                continue

            for first, last, mask, remaining, minimum in _LEAD_BYTES:
                if first <= byte <= last:
                    self._pending_value = byte & mask
                    self._pending_remaining = remaining
                    self._pending_minimum = minimum
                    break
            else:
                kind = (
                    ErrorKind.UNEXPECTED_CONTINUATION_BYTE
                    if byte < 0xC0
                    else ErrorKind.INVALID_LEAD_BYTE
                )
                self._substitute(kind, position, byte)
                code_points.append(REPLACEMENT_CHARACTER)
        return code_points

    def close(self) -> list[int]:
        """Signal end of stream and flush any incomplete sequence.

        :returns: ``[0xFFFD]`` if a sequence was left incomplete, else ``[]``.
        :raises Utf8Error: In strict mode, if a sequence was left incomplete.
        """
        if not self._pending_remaining:
            return []
        value = self._pending_value
        self.reset()
        self._substitute(ErrorKind.TRUNCATED_SEQUENCE, None, value)
        return [REPLACEMENT_CHARACTER]

    def reset(self) -> None:
        """Discard any partially decoded sequence."""
        if self._pending_remaining:
            self.logger.debug(
                "discarding partial sequence, %d continuation byte(s) missing",
                self._pending_remaining,
            )
        self._pending_value = 0
        self._pending_remaining = 0
        self._pending_minimum = 0

    @property
    def errors(self) -> ErrorMode:
        """The error mode this codec was created with."""
        return self._errors

    @property
    def idle(self) -> bool:
        """Whether no multi-byte sequence is in progress."""
        return self._pending_remaining == 0

    @property
    def pending_bytes(self) -> int:
        """Number of continuation bytes still expected."""
        return self._pending_remaining

    def _check_decoded(self, value: int, position: int) -> None:
        if value < self._pending_minimum:
            self._fail(ErrorKind.OVERLONG_ENCODING, position, value)
        if value > MAX_CODE_POINT:
            self._fail(ErrorKind.CODE_POINT_OUT_OF_RANGE, position, value)
        if is_surrogate(value):
            self._fail(ErrorKind.SURROGATE_CODE_POINT, position, value)

    def _substitute(self, kind: ErrorKind, position: int | None, value: int) -> None:
        """Raise in strict mode, otherwise note the substitution and return."""
        if self._errors is ErrorMode.STRICT:
            raise Utf8Error(kind, position, value)
        self.logger.debug(
            "%s 0x%X at position %s, substituting U+FFFD", kind.value, value, position
        )

    def _fail(self, kind: ErrorKind, position: int, value: int) -> None:
        """Drop the partial sequence, then raise."""
        self.reset()
        raise Utf8Error(kind, position, value)
