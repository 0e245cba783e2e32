"""Command-line interface for utf8codec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO

import utf8codec
from utf8codec.codec import Utf8
from utf8codec.enums import ErrorMode

_DEFAULT_CHUNK_SIZE = 65_536


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        value = 0
    if value < 1:
        msg = f"must be a positive integer, not {text!r}"
        raise argparse.ArgumentTypeError(msg)
    return value


def parse_code_points(text: str) -> list[int]:
    """Parse whitespace-separated hex code points.

    Each token may be written ``U+65E5``, ``0x65E5`` or ``65E5``.

    :raises ValueError: If a token is not a hexadecimal number.
    """
    code_points = []
    for token in text.split():
        digits = token
        if digits[:2].upper() in ("U+", "0X"):
            digits = digits[2:]
        try:
            code_points.append(int(digits, 16))
        except ValueError:
            msg = f"invalid code point {token!r}"
            raise ValueError(msg) from None
    return code_points


def _encode_stream(stream: BinaryIO, codec: Utf8, as_hex: bool) -> None:
    code_points = parse_code_points(stream.read().decode("ascii", "replace"))
    encoding = codec.encode(code_points)
    if as_hex:
        print(" ".join(f"{b:02X}" for b in encoding))
    else:
        sys.stdout.buffer.write(encoding)
        sys.stdout.buffer.flush()


def _decode_stream(stream: BinaryIO, codec: Utf8, chunk_size: int) -> None:
    code_points: list[int] = []
    while chunk := stream.read(chunk_size):
        code_points.extend(codec.decode(chunk))
    code_points.extend(codec.close())
    print(" ".join(f"U+{cp:04X}" for cp in code_points))


def main(argv: list[str] | None = None) -> None:
    """Run the ``utf8codec`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        description="Encode code points to UTF-8 or decode UTF-8 to code points."
    )
    parser.add_argument(
        "--version", action="version", version=f"utf8codec {utf8codec.__version__}"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("files", nargs="*", help="Input files (default: stdin)")
    common.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed input instead of substituting U+FFFD",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Log substitutions to stderr"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    encode_parser = subparsers.add_parser(
        "encode", parents=[common], help="Encode hex code points as UTF-8 bytes"
    )
    encode_parser.add_argument(
        "--hex", action="store_true", help="Write bytes as space-separated hex"
    )
    decode_parser = subparsers.add_parser(
        "decode", parents=[common], help="Decode UTF-8 bytes to U+XXXX code points"
    )
    decode_parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=_DEFAULT_CHUNK_SIZE,
        help="Bytes read per decode call (default: %(default)s)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s | %(name)s | %(message)s"
        )

    errors = ErrorMode.STRICT if args.strict else ErrorMode.REPLACE

    def run(stream: BinaryIO) -> None:
        codec = Utf8(errors)
        if args.command == "encode":
            _encode_stream(stream, codec, args.hex)
        else:
            _decode_stream(stream, codec, args.chunk_size)

    failed = False
    if args.files:
        for filepath in args.files:
            try:
                with Path(filepath).open("rb") as f:
                    run(f)
            except (OSError, ValueError) as e:
                print(f"utf8codec: {filepath}: {e}", file=sys.stderr)
                failed = True
    else:
        try:
            run(sys.stdin.buffer)
        except ValueError as e:
            print(f"utf8codec: stdin: {e}", file=sys.stderr)
            failed = True

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
