"""Persistent launch options of the mod starter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .ini import IniFile

SECTION = "GothicStarter"
KEY_PREFIX = "Options."
KEY_PARAMETER = "Parameter"
KEY_REPARSE = "Reparse"
KEY_WINDOW = "Window"
KEY_NO_MUSIC = "NoMusic"
KEY_NO_SOUND = "NoSound"
KEY_LOG_LEVEL = "LogLevel"
KEY_PHYSICAL = "Physical"

MAX_PARAMETER_LENGTH = 0x1000
MIN_LOG_LEVEL = 0
MAX_LOG_LEVEL = 4
DEFAULT_LOG_LEVEL = 2

_ZLOG_LABELS = ("", "4", "5", "8", "10")
_ZLOG_VALUES = {1: "4", 3: "8", 4: "10"}
_ZLOG_DEFAULT_VALUE = "5"

# Option attribute name and stored key of every persisted check box.
_FLAGS = (
    ("reparse", KEY_REPARSE),
    ("window", KEY_WINDOW),
    ("no_music", KEY_NO_MUSIC),
    ("no_sound", KEY_NO_SOUND),
    ("physical_first", KEY_PHYSICAL),
)


@dataclass
class Options:
    """Switches passed to the game when a mod is started.

    ``texconvert``, ``autoconvert`` and ``convert_all`` apply to one start
    only and are never stored.
    """

    parameters: str = ""
    reparse: bool = False
    window: bool = False
    no_music: bool = False
    no_sound: bool = False
    log_level: int = DEFAULT_LOG_LEVEL
    physical_first: bool = False
    texconvert: bool = False
    autoconvert: bool = False
    convert_all: bool = False


def _clamp_level(level: int) -> int:
    return max(MIN_LOG_LEVEL, min(MAX_LOG_LEVEL, level))


def zlog_label(level: int) -> str:
    """Return the text shown next to the log level slider."""
    if 0 <= level < len(_ZLOG_LABELS):
        return _ZLOG_LABELS[level]
    return ""


def zlog_argument(level: int) -> str | None:
    """Return the ``-zlog:`` switch for a slider position, or None when logging is off."""
    if level <= 0:
        return None
    return f"-zlog:{_ZLOG_VALUES.get(level, _ZLOG_DEFAULT_VALUE)},s"


def _key(name: str) -> str:
    return KEY_PREFIX + name


def load_options(path: str | os.PathLike[str]) -> Options:
    """Read stored options; anything missing keeps its default."""
    options = Options()
    if not Path(path).is_file():
        return options
    ini = IniFile(path)

    missing = object()
    parameters = ini.get(SECTION, _key(KEY_PARAMETER), missing)
    if parameters is not missing:
        options.parameters = parameters[:MAX_PARAMETER_LENGTH]

    options.log_level = _clamp_level(
        ini.get_int(SECTION, _key(KEY_LOG_LEVEL), options.log_level)
    )

    for attribute, name in _FLAGS:
        if ini.get_int(SECTION, _key(name), 0):
            setattr(options, attribute, True)
    return options


def save_options(options: Options, path: str | os.PathLike[str]) -> None:
    """Store the persistent part of ``options`` in ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    ini = IniFile(target)
    parameters = options.parameters[:MAX_PARAMETER_LENGTH].replace("\r", " ").replace("\n", " ")
    ini.set(SECTION, _key(KEY_PARAMETER), parameters)
    ini.set(SECTION, _key(KEY_LOG_LEVEL), str(options.log_level))
    for attribute, name in _FLAGS:
        ini.set(SECTION, _key(name), "1" if getattr(options, attribute) else "0")
    ini.save()