"""Checked reads and writes on binary streams."""

from __future__ import annotations

from typing import BinaryIO

from .errors import ErrorKind, LsdjError


def read_bytes(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes, raising LsdjError(READ_FAILED) on a short read."""
    try:
        data = stream.read(size)
    except OSError as exc:
        raise LsdjError(ErrorKind.READ_FAILED, str(exc)) from exc
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise LsdjError(ErrorKind.READ_FAILED, f"wanted {size} bytes, got {got}")
    return bytes(data)


def read_byte(stream: BinaryIO) -> int:
    """Read a single byte and return its value."""
    return read_bytes(stream, 1)[0]


def write_bytes(stream: BinaryIO, data: bytes) -> int:
    """Write all of ``data``, raising LsdjError(WRITE_FAILED) otherwise.

    Returns the number of bytes written.
    """
    try:
        written = stream.write(data)
    except OSError as exc:
        raise LsdjError(ErrorKind.WRITE_FAILED, str(exc)) from exc
    if written is not None and written != len(data):
        raise LsdjError(ErrorKind.WRITE_FAILED, f"wrote {written} of {len(data)} bytes")
    return len(data)


def write_byte(stream: BinaryIO, value: int) -> int:
    """Write a single byte value (0-255)."""
    return write_bytes(stream, bytes([value]))


def write_repeat(stream: BinaryIO, data: bytes, count: int) -> int:
    """Write ``data`` ``count`` times in a row; returns the bytes written."""
    if count <= 0 or not data:
        return 0
    return write_bytes(stream, bytes(data) * count)