"""Case-insensitive command name normalization."""

from __future__ import annotations

import string
from typing import TypeVar

_ASCII_LOWER_STR = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ASCII_LOWER_BYTES = bytes.maketrans(string.ascii_uppercase.encode("ascii"), string.ascii_lowercase.encode("ascii"))

NameT = TypeVar("NameT", str, bytes)


def normalize_name(text: NameT) -> NameT:
    # Only A-Z are folded; other characters pass through unchanged.
    if isinstance(text, bytes):
        return text.translate(_ASCII_LOWER_BYTES)
    return text.translate(_ASCII_LOWER_STR)
