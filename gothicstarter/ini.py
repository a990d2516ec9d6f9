"""A small reader and writer for Windows-style INI files."""

from __future__ import annotations

import os
import re
from pathlib import Path

_ENCODING = "cp1252"
_ERRORS = "surrogateescape"
_LEADING_INT = re.compile(r"[+-]?\d+")


def _section_name(line: str) -> str | None:
    stripped = line.strip()
    if stripped.startswith("[") and "]" in stripped:
        return stripped[1 : stripped.index("]")].strip()
    return None


def _split_entry(line: str) -> tuple[str, str] | None:
    stripped = line.strip()
    if not stripped or stripped.startswith(";") or "=" not in stripped:
        return None
    key, _, value = stripped.partition("=")
    return key.strip(), value.strip()


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


class IniFile:
    """An INI file with case-insensitive sections and keys.

    Lookups follow the usual profile-file rules: the first matching
    section and key win, values are stripped of surrounding blanks and
    quotes. Changes are kept in memory until :meth:`save` is called.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._newline = "\r\n"
        self._lines: list[str] = []
        if self.path.is_file():
            with open(self.path, encoding=_ENCODING, errors=_ERRORS, newline="") as handle:
                content = handle.read()
            if "\r\n" not in content and "\n" in content:
                self._newline = "\n"
            self._lines = content.splitlines()

    def _section_bounds(self, section: str) -> tuple[int, int] | None:
        wanted = section.lower()
        start = None
        for index, line in enumerate(self._lines):
            name = _section_name(line)
            if name is None:
                continue
            if start is not None:
                return start, index
            if name.lower() == wanted:
                start = index + 1
        if start is None:
            return None
        return start, len(self._lines)

    def _find_key(self, section: str, key: str) -> tuple[int, str] | None:
        bounds = self._section_bounds(section)
        if bounds is None:
            return None
        wanted = key.lower()
        for index in range(*bounds):
            entry = _split_entry(self._lines[index])
            if entry is not None and entry[0].lower() == wanted:
                return index, entry[1]
        return None

    def get(self, section: str, key: str, default: str = "") -> str:
        """Return the value of ``key`` in ``section``, or ``default``."""
        found = self._find_key(section, key)
        if found is None:
            return default
        return _unquote(found[1])

    def get_int(self, section: str, key: str, default: int = 0) -> int:
        """Return the leading integer of a value, ``default`` if the key is missing.

        A value that does not start with a number reads as 0.
        """
        found = self._find_key(section, key)
        if found is None:
            return default
        match = _LEADING_INT.match(_unquote(found[1]).strip())
        return int(match.group()) if match else 0

    def section_lines(self, section: str) -> list[str]:
        """Return the non-blank, non-comment lines of ``section`` in order."""
        bounds = self._section_bounds(section)
        if bounds is None:
            return []
        lines = (self._lines[index].strip() for index in range(*bounds))
        return [line for line in lines if line and not line.startswith(";")]

    def set(self, section: str, key: str, value: str | None) -> None:
        """Set ``key`` in ``section``; a value of ``None`` removes the key."""
        found = self._find_key(section, key)
        if found is not None:
            index = found[0]
            if value is None:
                del self._lines[index]
            else:
                self._lines[index] = f"{key}={value}"
            return
        if value is None:
            return
        bounds = self._section_bounds(section)
        if bounds is None:
            if self._lines and self._lines[-1].strip():
                self._lines.append("")
            self._lines.extend([f"[{section}]", f"{key}={value}"])
            return
        start, end = bounds
        insert_at = end
        while insert_at > start and not self._lines[insert_at - 1].strip():
            insert_at -= 1
        self._lines.insert(insert_at, f"{key}={value}")

    def save(self) -> None:
        """Write the file back to disk."""
        text = self._newline.join(self._lines)
        if self._lines:
            text += self._newline
        with open(self.path, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as handle:
            handle.write(text)