"""Helpers for names of projects and files."""

from __future__ import annotations

from typing import Union

PROJECT_NAME_LENGTH = 8


def compare_case_insensitive(first: str, second: str) -> bool:
    """Whether two strings are equal ignoring case."""
    return first.lower() == second.lower()


def construct_project_name(name: Union[str, bytes], underscore: bool = False) -> str:
    """Turn a raw project name into a string.

    The name is cut to eight characters or at its first NUL; with
    ``underscore`` every ``x`` becomes ``_``.
    """
    if isinstance(name, (bytes, bytearray)):
        name = bytes(name).decode("latin-1")
    name = name[:PROJECT_NAME_LENGTH].split("\0", 1)[0]
    if underscore:
        name = name.replace("x", "_")
    return name


def is_hidden_file(name: str) -> bool:
    """Whether a file name denotes a hidden file (and should be skipped)."""
    if not name:
        return True
    if len(name) == 1:
        return False
    return name[0] == "." and name[1] not in "./"