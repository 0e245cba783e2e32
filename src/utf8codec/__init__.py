"""UTF-8 encoding and incremental decoding of Unicode code points."""

from __future__ import annotations

from collections.abc import Iterable

from utf8codec._utils import (
    MAX_CODE_POINT,
    REPLACEMENT_BYTES,
    REPLACEMENT_CHARACTER,
    ascii_to_unicode,
)
from utf8codec.codec import Utf8
from utf8codec.enums import ErrorKind, ErrorMode
from utf8codec.errors import Utf8Error

__version__ = "1.0.0"
__all__ = [
    "MAX_CODE_POINT",
    "REPLACEMENT_BYTES",
    "REPLACEMENT_CHARACTER",
    "ErrorKind",
    "ErrorMode",
    "Utf8",
    "Utf8Error",
    "ascii_to_unicode",
    "decode",
    "encode",
]


def encode(
    code_points: Iterable[int] | str, errors: ErrorMode | str = ErrorMode.REPLACE
) -> bytes:
    """Encode a sequence of code points as UTF-8.

    Shorthand for ``Utf8(errors).encode(code_points)``.
    """
    return Utf8(errors).encode(code_points)


def decode(
    data: bytes | bytearray | memoryview | str | Iterable[int],
    errors: ErrorMode | str = ErrorMode.REPLACE,
    final: bool = True,
) -> list[int]:
    """Decode a complete UTF-8 byte string on a fresh codec.

    When *final* is True (the default) an incomplete sequence at the end of
    *data* is flushed as U+FFFD (or raises in strict mode).  When False it
    is silently dropped, which is what a single :meth:`Utf8.decode` call
    does.
    """
    codec = Utf8(errors)
    code_points = codec.decode(data)
    if final:
        code_points.extend(codec.close())
    return code_points
