"""Internal shared constants and helpers for utf8codec."""

from __future__ import annotations

from collections.abc import Iterable

from utf8codec.enums import ErrorMode

#: The replacement character substituted for unrepresentable input.
REPLACEMENT_CHARACTER: int = 0xFFFD

#: UTF-8 encoding of :data:`REPLACEMENT_CHARACTER`.
REPLACEMENT_BYTES: bytes = b"\xef\xbf\xbd"

#: Largest Unicode scalar value.
MAX_CODE_POINT: int = 0x10FFFF

#: First and last code points reserved for UTF-16 surrogates.
SURROGATE_FIRST: int = 0xD800
SURROGATE_LAST: int = 0xDFFF


def is_surrogate(code_point: int) -> bool:
    """Return True if *code_point* lies in the UTF-16 surrogate range."""
    return SURROGATE_FIRST <= code_point <= SURROGATE_LAST


def ascii_to_unicode(ascii: str | bytes | bytearray) -> list[int]:
    """Widen each 8-bit character of *ascii* into a code point of equal value.

    :param ascii: Narrow text, either as bytes or as a ``str`` whose
        characters are all at most U+00FF.
    :returns: One code point per input character.
    :raises ValueError: If a ``str`` character does not fit in 8 bits.
    """
    return list(_as_bytes(ascii))


def _as_bytes(data: str | bytes | bytearray | memoryview | Iterable[int]) -> bytes:
    """Coerce decoder input into ``bytes``.

    A ``str`` is treated as narrow 8-bit characters: each character's ordinal
    is taken as one byte, without any locale-aware reinterpretation.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as e:
            char = data[e.start]
            msg = f"character {char!r} at index {e.start} is not an 8-bit character"
            raise ValueError(msg) from None
    # bytes() raises ValueError for ints outside 0-255 and TypeError for
    # non-int items, which is what we want to surface.
    return bytes(data)


def _validate_errors(errors: ErrorMode | str) -> ErrorMode:
    """Resolve *errors* to an :class:`ErrorMode`, raising ValueError if unknown."""
    if isinstance(errors, ErrorMode):
        return errors
    try:
        return ErrorMode(errors)
    except ValueError:
        choices = ", ".join(repr(m.value) for m in ErrorMode)
        msg = f"errors must be one of {choices}, not {errors!r}"
        raise ValueError(msg) from None
