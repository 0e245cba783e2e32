"""Enumerations for utf8codec."""

import enum


class ErrorMode(enum.Enum):
    """How the codec reacts to input it cannot represent faithfully."""

    REPLACE = "replace"
    STRICT = "strict"


class ErrorKind(enum.Enum):
    """The kind of malformed input reported by a strict-mode :class:`Utf8Error`."""

    INVALID_LEAD_BYTE = "invalid lead byte"
    UNEXPECTED_CONTINUATION_BYTE = "unexpected continuation byte"
    TRUNCATED_SEQUENCE = "truncated sequence"
    OVERLONG_ENCODING = "overlong encoding"
    CODE_POINT_OUT_OF_RANGE = "code point out of range"
    SURROGATE_CODE_POINT = "surrogate code point"
