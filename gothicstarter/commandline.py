"""Startup arguments of the starter and the command line handed to the game."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .settings import Options, zlog_argument
from .textutil import find_substring

DEFAULT_FOCUS = "GothicGame.ini"
GAME_SWITCH = "-game:"
MAX_ERROR_COMMAND = 1024


@dataclass
class StartupArgs:
    """What the starter's own command line asks for."""

    auto_focus: str = DEFAULT_FOCUS
    auto_start: bool = False
    run_spacer: bool = False
    auto_close: bool = False


def parse_startup_args(cmdline: str | None) -> StartupArgs:
    """Parse ``-game:<mod>``, ``-start`` and ``-spacer`` from a command line.

    The mod name ends at a blank or a quote and gets ``.ini`` appended
    unless it already contains it.
    """
    args = StartupArgs()
    if cmdline:
        found = find_substring(cmdline, GAME_SWITCH, -1)
        if found is not None:
            name = []
            for char in cmdline[found + len(GAME_SWITCH):]:
                if char in ' "':
                    break
                name.append(char)
            focus = "".join(name)
            if find_substring(focus, ".ini", -1) is None:
                focus += ".ini"
            args.auto_focus = focus
        args.auto_start = find_substring(cmdline, "-start", -1) is not None
        args.run_spacer = args.auto_start and find_substring(cmdline, "-spacer", -1) is not None
    args.auto_close = args.auto_start
    return args


def executable_name(is_gothic1: bool, run_spacer: bool = False) -> str:
    """Return the program to start for the game version and mode."""
    if run_spacer:
        return "Spacer.exe" if is_gothic1 else "Spacer2.exe"
    return "GothicMod.exe" if is_gothic1 else "Gothic2.exe"


def build_command(
    app_dir: str | os.PathLike[str],
    base: str,
    options: Options | None = None,
    is_gothic1: bool = False,
    run_spacer: bool = False,
    auto_close: bool = False,
) -> str:
    """Build the command line that starts a mod.

    Extra parameters typed by the user are left out when the starter closes
    on its own after the game ends.
    """
    program = os.path.join(os.fspath(app_dir), executable_name(is_gothic1, run_spacer))
    parts = [f'"{program}"', f"{GAME_SWITCH}{base}.ini"]
    if options is not None:
        if options.reparse:
            parts.append("-zreparse")
        if options.window:
            parts.append("-zwindow")
        if options.no_music:
            parts.append("-znomusic")
        if options.no_sound:
            parts.append("-znosound")
        log = zlog_argument(options.log_level)
        if log:
            parts.append(log)
        if options.texconvert:
            parts.append("-ztexconvert")
        if options.autoconvert:
            parts.append("-zautoconvertdata")
        if options.convert_all:
            parts.append("-zconvertall")
        if options.physical_first:
            parts.append("-vdfs:physicalfirst")
        if not auto_close and options.parameters:
            parts.append(options.parameters)
    return " ".join(parts)


def format_launch_error(command: str, message: str) -> str:
    """Compose the error text shown when the game cannot be started.

    Long commands are cut short, and the ``-game:`` switch starts a new line.
    """
    if len(command) > MAX_ERROR_COMMAND:
        command = command[:MAX_ERROR_COMMAND] + " [...]"
    text = f"{command}\n\n{message}"
    found = find_substring(text, GAME_SWITCH, -1)
    if found:
        text = text[: found - 1] + "\n" + text[found:]
    return text