"""Filename heuristic applied to files with no content match."""

from __future__ import annotations

import re

DEFAULT_FILENAME_MARKERS = ("Quantum", "Consciousness", "Infinite")
FILENAME_VIOLATION = "filename suggests fake AI"

_SEPARATORS = re.compile(r"[\\/]")


def basename(path: str) -> str:
    """Return the last path component, accepting both separator styles."""
    return _SEPARATORS.split(path)[-1]


def filename_is_suspicious(path: str, markers: tuple[str, ...]) -> bool:
    name = basename(path)
    return any(marker in name for marker in markers)
