"""Finding the mods of a game installation and starting the game with one of them."""

from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys
import tempfile
import threading
from contextlib import contextmanager, suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from .commandline import build_command, format_launch_error, parse_startup_args
from .files import copy_file, file_exists, move_file, move_mod_files
from .ini import IniFile
from .modinfo import GOTHIC_GAME_INI, INVALID, ModInfo, Override, load_mod
from .settings import Options, load_options

Runner = Callable[[str, Path], int]

ZSPY_EXE = "zSpy.exe"
INTERNAL_SECTION = "INTERNAL"
ABNORMAL_EXIT_KEY = "gameAbnormalExit"

_launch_lock = threading.Lock()


class LaunchError(RuntimeError):
    """The game could not be started; the message says what was tried."""


@dataclass(frozen=True)
class GameLayout:
    """The folders of a game installation.

    ``app_dir`` holds the executables and mod files, ``root_dir`` is the
    installation folder above it.
    """

    app_dir: Path
    root_dir: Path
    is_gothic1: bool

    @classmethod
    def detect(cls, exe_dir: str | os.PathLike[str]) -> GameLayout:
        """Describe the installation whose executables live in ``exe_dir``."""
        app_dir = Path(exe_dir).resolve()
        return cls(
            app_dir=app_dir,
            root_dir=app_dir.parent,
            is_gothic1=not file_exists(app_dir / "Gothic2.exe"),
        )

    @property
    def gothic_ini(self) -> Path:
        return self.app_dir / "Gothic.ini"

    @property
    def systempack_ini(self) -> Path:
        return self.app_dir / "SystemPack.ini"

    @property
    def vdfs_dump(self) -> Path:
        return self.root_dir / "VDFS.DMP"

    def vdfs_dump_for(self, base: str) -> Path:
        """The saved volume dump belonging to the mod ``base``."""
        return self.root_dir / f"vdfs_{base}.dmp"


def discover_mods(layout: GameLayout, mod_version: bool = True) -> list[ModInfo]:
    """Load every mod file of the installation, ``GothicGame.ini`` first."""
    candidates = [layout.app_dir / GOTHIC_GAME_INI]
    if layout.app_dir.is_dir():
        candidates += sorted(
            (
                entry
                for entry in layout.app_dir.iterdir()
                if entry.suffix.lower() == ".ini"
                and entry.name.lower() != GOTHIC_GAME_INI.lower()
            ),
            key=lambda entry: entry.name.lower(),
        )
    mods = []
    for path in candidates:
        info = load_mod(path, layout.is_gothic1, mod_version)
        if info is not None:
            mods.append(info)
    return mods


def apply_overrides(
    ini_path: str | os.PathLike[str], overrides: Iterable[Override]
) -> list[Override]:
    """Write ``overrides`` into an INI file and return the values they replaced.

    Only keys that already hold a non-empty value are changed.
    """
    ini = IniFile(ini_path)
    originals = []
    for override in overrides:
        current = ini.get(override.section, override.key, INVALID)
        if not current or current == INVALID:
            continue
        originals.append(Override(override.section, override.key, current))
        ini.set(override.section, override.key, override.value)
    if originals:
        ini.save()
    return originals


def restore_overrides(
    ini_path: str | os.PathLike[str], originals: Iterable[Override]
) -> None:
    """Write back the values returned by :func:`apply_overrides`."""
    originals = list(originals)
    if not originals:
        return
    ini = IniFile(ini_path)
    for original in originals:
        ini.set(original.section, original.key, original.value)
    ini.save()


def _park(path: Path, directory: Path) -> Path:
    handle, name = tempfile.mkstemp(prefix="ini", suffix=".tmp", dir=directory)
    os.close(handle)
    move_file(path, name)
    return Path(name)


@contextmanager
def prepared_mod(layout: GameLayout, info: ModInfo) -> Iterator[list[Path]]:
    """Set the installation up for ``info`` and undo it all on exit.

    Enables the mod's volumes, puts the mod file in place of its base file,
    applies the INI overrides and brings back a saved volume dump. Yields
    the volumes now in the data folder.
    """
    enabled = move_mod_files(layout.root_dir, info.volumes)
    base_file = layout.app_dir / f"{info.base}.ini"
    parked: Path | None = None
    swapped = False
    gothic_originals: list[Override] = []
    systempack_originals: list[Override] = []
    try:
        if info.aliased:
            if file_exists(base_file):
                parked = _park(base_file, layout.app_dir)
            copy_file(info.path, base_file)
            swapped = True
        gothic_originals = apply_overrides(layout.gothic_ini, info.overrides)
        systempack_originals = apply_overrides(layout.systempack_ini, info.overrides_sp)
        if not layout.is_gothic1:
            dump = layout.vdfs_dump_for(info.base)
            if file_exists(dump):
                ini = IniFile(layout.gothic_ini)
                ini.set(INTERNAL_SECTION, ABNORMAL_EXIT_KEY, "0")
                ini.save()
                copy_file(dump, layout.vdfs_dump)
                dump.unlink()
        yield enabled
    finally:
        restore_overrides(layout.gothic_ini, gothic_originals)
        restore_overrides(layout.systempack_ini, systempack_originals)
        if parked is not None:
            move_file(parked, base_file)
        elif swapped:
            with suppress(FileNotFoundError):
                base_file.unlink()
        move_mod_files(layout.root_dir)


def _process_running(name: str) -> bool:
    wanted = name.lower()
    if os.name == "nt":
        try:
            listing = subprocess.run(
                ["tasklist", "/FO", "CSV", "/NH"],
                capture_output=True,
                text=True,
                check=False,
            ).stdout
        except OSError:
            return False
        return any(
            line.split(",")[0].strip('"').lower() == wanted
            for line in listing.splitlines()
            if line
        )
    proc = Path("/proc")
    if not proc.is_dir():
        return False
    for entry in proc.iterdir():
        if not entry.name.isdigit():
            continue
        with suppress(OSError):
            if (entry / "comm").read_text().strip().lower() == wanted[:15]:
                return True
    return False


def _start_zspy(layout: GameLayout) -> None:
    spy_root = layout.root_dir / "_work" / "tools" / "zSpy"
    if not file_exists(spy_root / ZSPY_EXE):
        spy_root = layout.app_dir
    spy = spy_root / ZSPY_EXE
    if not spy.is_file() or _process_running(ZSPY_EXE):
        return
    with suppress(OSError):
        subprocess.Popen([str(spy)], cwd=spy_root)


def _run_command(command: str, cwd: Path) -> int:
    args: str | list[str] = command if os.name == "nt" else shlex.split(command)
    return subprocess.call(args, cwd=cwd)


def launch_mod(
    layout: GameLayout,
    info: ModInfo,
    options: Options | None = None,
    run_spacer: bool = False,
    auto_close: bool = False,
    runner: Runner | None = None,
) -> int | None:
    """Start the game with ``info`` and wait for it to end.

    Returns the game's exit code, or ``None`` if another mod is already
    running. Raises :class:`LaunchError` if the game cannot be started;
    the installation is restored either way.
    """
    if not _launch_lock.acquire(blocking=False):
        return None
    try:
        run = runner or _run_command
        with prepared_mod(layout, info):
            command = build_command(
                layout.app_dir, info.base, options, layout.is_gothic1, run_spacer, auto_close
            )
            if options is not None and options.log_level > 0:
                _start_zspy(layout)
            try:
                code = run(command, layout.app_dir)
            except OSError as exc:
                message = exc.strerror or str(exc)
                raise LaunchError(format_launch_error(command, message)) from exc
            if not layout.is_gothic1:
                ini = IniFile(layout.gothic_ini)
                if ini.get_int(INTERNAL_SECTION, ABNORMAL_EXIT_KEY, 1) == 0 and file_exists(
                    layout.vdfs_dump
                ):
                    copy_file(layout.vdfs_dump, layout.vdfs_dump_for(info.base))
            return code
    finally:
        _launch_lock.release()


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gothicstarter",
        allow_abbrev=False,
        description="List the installed mods or start the game with one of them "
        "(-game:<mod> selects a mod, -start starts it, -spacer starts the editor).",
    )
    parser.add_argument("--dir", type=Path, help="folder holding the game executables")
    parser.add_argument("--options", type=Path, help="file the launch options are read from")
    parser.add_argument(
        "--play",
        action="store_true",
        help="start the selected mod and keep the extra parameters",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the starter from the command line."""
    namespace, rest = _parser().parse_known_args(argv)
    startup = parse_startup_args(" ".join(rest))
    layout = GameLayout.detect(namespace.dir or Path.cwd())
    options_path = namespace.options or Path.home() / ".gothicstarter.ini"

    auto_start = startup.auto_start or namespace.play
    auto_close = startup.auto_close
    if auto_start and not file_exists(layout.app_dir / startup.auto_focus):
        print(f"{startup.auto_focus}: file not found", file=sys.stderr)
        auto_start = auto_close = False

    mods = discover_mods(layout, True)
    focus = startup.auto_focus.lower()
    if not auto_start:
        for mod in mods:
            marker = "*" if mod.filename.lower() == focus else " "
            print(f"{marker} {mod.title}")
        return 0

    selected = next((mod for mod in mods if mod.filename.lower() == focus), None)
    if selected is None:
        print(f"{startup.auto_focus}: not a mod file", file=sys.stderr)
        return 1
    options = load_options(options_path)
    try:
        launch_mod(layout, selected, options, startup.run_spacer, auto_close)
    except LaunchError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0