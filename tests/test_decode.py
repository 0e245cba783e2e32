from __future__ import annotations

import pytest

from utf8codec import REPLACEMENT_CHARACTER, ErrorKind, Utf8, Utf8Error

_MIXED = "Héllo, 日本語 𣎴!".encode()
_MALFORMED = b"A\x80\xc3\xa9\xff\xe6\x97\xa5\xf8\xe6\x41\x42\xc0\xaf\xf0\xa3"


def test_decode_ascii(codec: Utf8):
    assert codec.decode(b"Hello") == [0x48, 0x65, 0x6C, 0x6C, 0x6F]


def test_decode_multibyte(codec: Utf8):
    assert codec.decode(_MIXED) == [ord(c) for c in "Héllo, 日本語 𣎴!"]


def test_decode_split_across_calls(codec: Utf8):
    assert codec.decode(b"\xe6") == []
    assert codec.decode(b"\x97") == []
    assert codec.decode(b"\xa5") == [0x65E5]


def test_decode_empty_chunk_keeps_state(codec: Utf8):
    codec.decode(b"\xf0\xa3")
    assert codec.decode(b"") == []
    assert codec.decode(b"\x8e\xb4") == [0x233B4]


def test_chunk_returns_only_completed_code_points(codec: Utf8):
    assert codec.decode(b"ab\xe6\x97") == [0x61, 0x62]
    assert codec.decode(b"\xa5cd") == [0x65E5, 0x63, 0x64]


@pytest.mark.parametrize("byte", [0x80, 0xBF, 0xF8, 0xFB, 0xFC, 0xFF])
def test_invalid_lead_byte_is_replaced(codec: Utf8, byte: int):
    assert codec.decode(bytes([byte])) == [REPLACEMENT_CHARACTER]
    assert codec.idle


def test_stray_bytes_each_replaced(codec: Utf8):
    # No resynchronization: every stray byte yields its own replacement.
    assert codec.decode(b"\xff\x80\x80") == [REPLACEMENT_CHARACTER] * 3


def test_mid_sequence_bytes_taken_as_continuation(codec: Utf8):
    # 0x41 and 0x42 are consumed as if they were continuation bytes.
    assert codec.decode(b"\xe6\x41\x42") == [0x6042]


def test_decode_does_not_reject_surrogates(codec: Utf8):
    assert codec.decode(b"\xed\xa0\x80") == [0xD800]


def test_decode_does_not_reject_out_of_range(codec: Utf8):
    assert codec.decode(b"\xf4\x90\x80\x80") == [0x110000]
    assert codec.decode(b"\xf7\xbf\xbf\xbf") == [0x1FFFFF]


def test_decode_accepts_overlong(codec: Utf8):
    assert codec.decode(b"\xc0\xaf") == [0x2F]


def test_decode_narrow_str(codec: Utf8):
    assert codec.decode("\xe6\x97\xa5") == [0x65E5]


def test_decode_wide_str_rejected(codec: Utf8):
    with pytest.raises(ValueError, match="8-bit"):
        codec.decode("日")


def test_decode_bytearray_and_memoryview(codec: Utf8):
    assert codec.decode(bytearray(b"\xc3")) == []
    assert codec.decode(memoryview(b"\xa9")) == [0xE9]


def test_decode_int_iterable(codec: Utf8):
    assert codec.decode([0xE6, 0x97, 0xA5]) == [0x65E5]


def test_decode_int_iterable_out_of_byte_range(codec: Utf8):
    with pytest.raises(ValueError):
        codec.decode([0x100])


@pytest.mark.parametrize("data", [_MIXED, _MALFORMED])
def test_chunk_invariance_two_way_splits(data: bytes):
    expected = Utf8().decode(data)
    for split in range(1, len(data)):
        codec = Utf8()
        assert codec.decode(data[:split]) + codec.decode(data[split:]) == expected


@pytest.mark.parametrize("data", [_MIXED, _MALFORMED])
def test_chunk_invariance_byte_at_a_time(data: bytes):
    expected = Utf8().decode(data)
    codec = Utf8()
    decoded = []
    for i in range(len(data)):
        decoded.extend(codec.decode(data[i : i + 1]))
    assert decoded == expected


def test_round_trip(codec: Utf8):
    code_points = [
        cp for cp in range(0, 0x110000, 0x101) if not 0xD800 <= cp <= 0xDFFF
    ]
    code_points += [0x7F, 0x80, 0x7FF, 0x800, 0xD7FF, 0xE000, 0xFFFF, 0x10000, 0x10FFFF]
    assert Utf8().decode(codec.encode(code_points)) == code_points


def test_close_when_idle(codec: Utf8):
    codec.decode(b"abc")
    assert codec.close() == []


def test_close_flushes_incomplete_sequence(codec: Utf8):
    codec.decode(b"\xe6\x97")
    assert codec.close() == [REPLACEMENT_CHARACTER]
    assert codec.idle
    assert codec.decode(b"A") == [0x41]


def test_reset_discards_partial_sequence(codec: Utf8):
    codec.decode(b"\xf0\xa3\x8e")
    codec.reset()
    assert codec.idle
    assert codec.close() == []
    assert codec.decode(b"\xb4") == [REPLACEMENT_CHARACTER]


def test_pending_bytes_tracks_sequence(codec: Utf8):
    assert codec.idle
    assert codec.pending_bytes == 0
    codec.decode(b"\xf0")
    assert not codec.idle
    assert codec.pending_bytes == 3
    codec.decode(b"\xa3\x8e")
    assert codec.pending_bytes == 1
    codec.decode(b"\xb4")
    assert codec.idle


def test_strict_valid_input_decodes_normally(strict_codec: Utf8):
    assert strict_codec.decode(_MIXED[:5]) + strict_codec.decode(_MIXED[5:]) == [
        ord(c) for c in "Héllo, 日本語 𣎴!"
    ]


@pytest.mark.parametrize(
    ("data", "kind", "position"),
    [
        (b"\x80", ErrorKind.UNEXPECTED_CONTINUATION_BYTE, 0),
        (b"ab\xbf", ErrorKind.UNEXPECTED_CONTINUATION_BYTE, 2),
        (b"A\xf8", ErrorKind.INVALID_LEAD_BYTE, 1),
        (b"\xff", ErrorKind.INVALID_LEAD_BYTE, 0),
        (b"\xe6\x41", ErrorKind.TRUNCATED_SEQUENCE, 1),
        (b"\xe6\x97\xe6", ErrorKind.TRUNCATED_SEQUENCE, 2),
        (b"\xc0\xaf", ErrorKind.OVERLONG_ENCODING, 1),
        (b"\xe0\x80\x80", ErrorKind.OVERLONG_ENCODING, 2),
        (b"\xed\xa0\x80", ErrorKind.SURROGATE_CODE_POINT, 2),
        (b"\xf4\x90\x80\x80", ErrorKind.CODE_POINT_OUT_OF_RANGE, 3),
    ],
)
def test_strict_errors(strict_codec: Utf8, data: bytes, kind: ErrorKind, position: int):
    with pytest.raises(Utf8Error) as excinfo:
        strict_codec.decode(data)
    assert excinfo.value.kind is kind
    assert excinfo.value.position == position
    assert strict_codec.idle


def test_strict_error_leaves_codec_usable(strict_codec: Utf8):
    with pytest.raises(Utf8Error):
        strict_codec.decode(b"\xe6\x41")
    assert strict_codec.decode(b"\xc3\xa9") == [0xE9]


def test_strict_close_with_incomplete_sequence(strict_codec: Utf8):
    strict_codec.decode(b"\xe6\x97")
    with pytest.raises(Utf8Error) as excinfo:
        strict_codec.close()
    assert excinfo.value.kind is ErrorKind.TRUNCATED_SEQUENCE
    assert excinfo.value.position is None
    assert excinfo.value.value == 0x197
    assert strict_codec.idle
