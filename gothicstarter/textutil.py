"""String helpers shared by the mod parsing and command-line code."""

from __future__ import annotations

import re
from itertools import takewhile

_RTF_HEX_ESCAPE = re.compile(r"\\'([0-9A-Fa-f]{2})")


def find_substring(text: str, sub: str, limit: int = -1) -> int | None:
    """Return the index of the first occurrence of ``sub`` in ``text``.

    Only matches starting at or before ``limit`` are considered; a negative
    limit means "anywhere". An empty ``sub`` matches at index 0. Returns
    ``None`` if there is no match.
    """
    if not sub:
        return 0
    span = len(text) - len(sub)
    if span < 0:
        return None
    if limit < 0 or limit > span:
        limit = span
    index = text.find(sub, 0, limit + len(sub))
    return None if index < 0 else index


def _decode_hex_byte(match: re.Match[str]) -> str:
    value = int(match.group(1), 16)
    try:
        return bytes([value]).decode("cp1252")
    except UnicodeDecodeError:
        return chr(value)


def decode_rtf_hex_escapes(text: str) -> str:
    r"""Replace RTF ``\'xx`` escapes with the characters they encode."""
    return _RTF_HEX_ESCAPE.sub(_decode_hex_byte, text)


def split_volumes(text: str) -> list[str]:
    """Split a volume list separated by double spaces.

    The list ends at the first empty entry, so a run of four spaces or a
    leading double space cuts it short.
    """
    return list(takewhile(bool, text.split("  ")))