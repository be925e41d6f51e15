"""Error kinds and the exception raised for them."""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """The kinds of failure the library reports."""

    SUCCESS = enum.auto()
    READ_FAILED = enum.auto()
    WRITE_FAILED = enum.auto()
    SEEK_FAILED = enum.auto()
    TELL_FAILED = enum.auto()
    ALLOCATION_FAILED = enum.auto()
    NO_PROJECT_AT_INDEX = enum.auto()
    DECOMPRESSION_INCORRECT_SIZE = enum.auto()
    SRAM_INITIALIZATION_CHECK_FAILED = enum.auto()
    FILE_OPEN_FAILED = enum.auto()
    UNKNOWN_EXTENSION = enum.auto()


_DESCRIPTIONS = {
    ErrorKind.SUCCESS: "success",
    ErrorKind.READ_FAILED: "reading from virtual I/O failed",
    ErrorKind.WRITE_FAILED: "writing to virtual I/O failed",
    ErrorKind.SEEK_FAILED: "seeking position within virtual I/O failed",
    ErrorKind.TELL_FAILED: "telling position within virtual I/O failed",
    ErrorKind.ALLOCATION_FAILED: "allocating memory failed",
    ErrorKind.NO_PROJECT_AT_INDEX: "there is no project at the given slot index",
    ErrorKind.DECOMPRESSION_INCORRECT_SIZE: "the size of a song is not 0x8000 bytes after decompression",
    ErrorKind.SRAM_INITIALIZATION_CHECK_FAILED: "the SRAM initialization bytes aren't set to 'jk'",
    ErrorKind.FILE_OPEN_FAILED: "couldn't open a file",
    ErrorKind.UNKNOWN_EXTENSION: "unknown extension",
}


def error_description(kind: ErrorKind) -> Optional[str]:
    """Return a human readable description of ``kind``, or None if unknown."""
    return _DESCRIPTIONS.get(kind)


class LsdjError(Exception):
    """Raised when an operation fails; ``kind`` tells what went wrong."""

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        message = error_description(kind) or str(kind)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)