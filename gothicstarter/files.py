"""File helpers for swapping mod volumes in and out of the game's data folder."""

from __future__ import annotations

import errno
import fnmatch
import os
import re
import shutil
from pathlib import Path
from typing import Iterable

_WILDCARDS = "*?"


def _has_wildcards(name: str) -> bool:
    return any(char in _WILDCARDS for char in name)


def _matching(directory: Path, pattern: str) -> list[Path]:
    """Entries of ``directory`` whose names match a wildcard pattern, case-insensitively."""
    if not directory.is_dir():
        return []
    regex = re.compile(fnmatch.translate(pattern.replace("[", "[[]")), re.IGNORECASE)
    return sorted(
        (entry for entry in directory.iterdir() if regex.match(entry.name)),
        key=lambda entry: entry.name,
    )


def _find_first(pattern: str | os.PathLike[str]) -> Path | None:
    path = Path(pattern)
    if not _has_wildcards(path.name):
        return path if path.exists() else None
    found = _matching(path.parent, path.name)
    return found[0] if found else None


def _missing(path: Path) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))


def file_exists(path: str | os.PathLike[str]) -> bool:
    """Return True if ``path`` exists; ``*`` and ``?`` in the name act as wildcards."""
    return _find_first(path) is not None


def copy_file(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Copy a file, overwriting ``dst`` and keeping the source's timestamps."""
    src = Path(src)
    if not src.is_file():
        raise _missing(src)
    shutil.copy2(src, dst)


def move_file(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Move a file, replacing ``dst``; moving a path onto itself does nothing."""
    src, dst = Path(src), Path(dst)
    if not src.exists():
        raise _missing(src)
    if str(src).lower() == str(dst).lower():
        return
    if dst.exists() or dst.is_symlink():
        dst.unlink()
    shutil.move(str(src), str(dst))


def move_mod_files(
    root_dir: str | os.PathLike[str], volumes: Iterable[str] | None = None
) -> list[Path]:
    """Park every ``Data/*.mod`` in ``Data/modvdf``, then bring ``volumes`` back.

    Each volume name may hold wildcards; its first match in ``modvdf`` is
    moved into ``Data``. Returns the paths of the volumes now in ``Data``.
    """
    data_dir = Path(root_dir) / "Data"
    mods_dir = data_dir / "modvdf"
    if not mods_dir.exists():
        mods_dir.mkdir(parents=True)

    for parked in [entry for entry in _matching(data_dir, "*.mod") if entry.is_file()]:
        move_file(parked, mods_dir / parked.name)

    enabled = []
    for volume in volumes or ():
        found = _find_first(mods_dir / volume)
        if found is None:
            continue
        target = data_dir / found.name
        move_file(found, target)
        enabled.append(target)
    return enabled