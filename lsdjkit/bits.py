"""Bit manipulation on single bytes and LSDj name sanitising."""

from __future__ import annotations

from typing import Optional

_NUL = "\0"


def create_mask(count: int) -> int:
    """Return an integer with the lowest ``count`` bits set."""
    return (1 << count) - 1


def _check_range(position: int, count: int) -> None:
    if position < 0 or count < 0 or position + count > 8:
        raise ValueError(
            f"bit field at position {position} with {count} bits does not fit in a byte"
        )


def copy_bits(byte: int, position: int, count: int, bits: int) -> int:
    """Return ``byte`` with ``count`` low bits of ``bits`` written at ``position``."""
    _check_range(position, count)
    read_mask = create_mask(count)
    write_mask = ~(read_mask << position)
    return ((byte & write_mask) | ((bits & read_mask) << position)) & 0xFF


def get_bits(byte: int, position: int, count: int) -> int:
    """Return the bits of ``byte`` in the field, left in place (not shifted down)."""
    _check_range(position, count)
    return byte & (create_mask(count) << position) & 0xFF


def is_valid_name_char(c: str) -> bool:
    """Whether LSDj can display ``c`` in a name: 0-9, A-Z, x and space."""
    return ("0" <= c <= "9") or ("A" <= c <= "Z") or c == "x" or c == " "


def sanitize_name_char(c: str) -> Optional[str]:
    """Return ``c`` made valid for LSDj, or None when that is impossible."""
    if is_valid_name_char(c):
        return c
    if "a" <= c <= "z":
        return c.upper()
    return None


def sanitize_name(name: str) -> str:
    """Sanitise a name up to its first NUL character.

    Characters after a NUL are left untouched.
    Raises ValueError if a character cannot be made valid.
    """
    head, sep, tail = name.partition(_NUL)
    sanitized = []
    for c in head:
        fixed = sanitize_name_char(c)
        if fixed is None:
            raise ValueError(f"character {c!r} cannot be used in an LSDj name")
        sanitized.append(fixed)
    return "".join(sanitized) + sep + tail