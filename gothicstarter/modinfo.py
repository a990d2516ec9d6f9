"""Reading mod description files (``*.ini``) into :class:`ModInfo` records."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Iterable

from .ini import IniFile
from .textutil import decode_rtf_hex_escapes, split_volumes

INVALID = "!<invalid>"
NO_DESCRIPTION = "<none>"
GOTHIC_GAME_INI = "GothicGame.ini"
MAX_GOTHIC1_ICONS = 30

RTF_HEAD = "{\\rtf1"
RTF_ANSI = (
    "\\ansi\\ansicpg1252\\deflang1033\\deff0"
    "{\\fonttbl{\\f0\\fcharset0 MS Shell Dlg;}}\\fs16\\pard\\qc"
)
RTF_BOLD = "\\b "
RTF_PAR_BOLD_OFF = "\\par\\b0\n"
RTF_PAR = "\\par\n"
RTF_END = "}\n"
VERSION_LABEL = "Version: "

_DIGITS = "0123456789"


@dataclass(frozen=True)
class Override:
    """A value written into a game INI file while a mod runs."""

    section: str
    key: str
    value: str


@dataclass(frozen=True)
class IconSpec:
    """Where the icon of a mod comes from.

    ``kind`` is one of :attr:`DEFAULT` (the stock icon), :attr:`BUILTIN`
    (an entry of the bundled Gothic 1 icon list) or :attr:`FILE` (an icon
    extracted from ``path`` at ``index``).
    """

    DEFAULT: ClassVar[str] = "default"
    BUILTIN: ClassVar[str] = "builtin"
    FILE: ClassVar[str] = "file"

    kind: str = "default"
    index: int = 0
    path: str | None = None


@dataclass(frozen=True)
class ModInfo:
    """Everything the starter knows about one mod file."""

    path: Path
    filename: str
    name: str
    base: str
    volumes: tuple[str, ...]
    title: str
    icon: IconSpec = field(default_factory=IconSpec)
    description: str = ""
    info_rtf: str = ""
    overrides: tuple[Override, ...] = ()
    overrides_sp: tuple[Override, ...] = ()

    @property
    def aliased(self) -> bool:
        """True if the mod runs under another mod file's name."""
        return self.name.lower() != self.base.lower()


def parse_overrides(lines: Iterable[str]) -> list[Override]:
    """Parse ``section.key=value`` lines, dropping entries without section or key."""
    result = []
    for line in lines:
        target, _, value = line.partition("=")
        section, _, key = target.partition(".")
        section, key = section.strip(), key.strip()
        if section and key:
            result.append(Override(section, key, value.strip()))
    return result


def parse_icon(spec: str) -> IconSpec:
    """Interpret the ``Icon`` entry of a mod file.

    A plain number selects an entry of the built-in icon list (out of range
    numbers fall back to entry 1); ``file,index`` or ``file,-index``
    extracts an icon from a file; anything else is a file's first icon.
    """
    if not spec:
        return IconSpec()
    pos = len(spec) - 1
    while pos > 0 and spec[pos] in _DIGITS:
        pos -= 1
    if pos == 0:
        index = 0
        for char in spec:
            index = 10 * index + (ord(char) & 0x0F)
        if not 1 <= index < MAX_GOTHIC1_ICONS:
            index = 1
        return IconSpec(IconSpec.BUILTIN, index)
    if spec[pos] == "-":
        pos -= 1
    if pos > 0 and spec[pos] == ",":
        digits = spec[pos + 1 :]
        sign = 1
        if digits.startswith("-"):
            sign = -1
            digits = digits[1:]
        index = int(digits) if digits else 0
        return IconSpec(IconSpec.FILE, sign * index, spec[:pos])
    return IconSpec(IconSpec.FILE, 0, spec)


def build_info_rtf(title: str, version: str, authors: str, webpage: str) -> str:
    """Build the RTF shown in the information box of a mod."""
    parts = [
        RTF_HEAD, RTF_ANSI, RTF_PAR, RTF_PAR,
        RTF_BOLD, title, RTF_PAR_BOLD_OFF,
        VERSION_LABEL, version or NO_DESCRIPTION, RTF_PAR, RTF_PAR,
    ]
    if authors:
        parts += [RTF_BOLD, authors, RTF_PAR_BOLD_OFF]
    if webpage:
        parts += [webpage, RTF_PAR]
    parts += [RTF_PAR, RTF_END]
    return "".join(parts)


def load_mod(
    path: str | os.PathLike[str], is_gothic1: bool = False, mod_version: bool = True
) -> ModInfo | None:
    """Read a mod file, or return ``None`` if ``path`` does not describe a mod.

    A file qualifies if it exists, its name holds no space and it has a
    ``[FILES] VDF`` entry. With ``mod_version`` the title names the base
    file and no description or info text is built.
    """
    path = Path(path)
    filename = path.name
    if " " in filename or not path.is_file():
        return None
    ini = IniFile(path)
    vdf = ini.get("FILES", "VDF", INVALID)
    if vdf == INVALID:
        return None

    name = filename[:-4].lower()
    base = (ini.get("MOD", "Base", name) or name).lower()
    volumes = tuple(split_volumes(vdf))

    description = ""
    info_rtf = ""
    if mod_version:
        title = filename
        if name != base:
            title = f"{filename} -> {base}.ini"
    else:
        description = ini.get("INFO", "Description") or NO_DESCRIPTION
        info_rtf = build_info_rtf(
            ini.get("INFO", "Title") or filename,
            ini.get("INFO", "Version"),
            ini.get("INFO", "Authors"),
            ini.get("INFO", "Webpage"),
        )
        raw_title = ini.get("INFO", "Title", filename)
        title = decode_rtf_hex_escapes(raw_title) if raw_title else filename

    if is_gothic1 and filename.lower() == GOTHIC_GAME_INI.lower():
        icon = IconSpec(IconSpec.BUILTIN, 0)
    else:
        icon = parse_icon(ini.get("INFO", "Icon"))

    return ModInfo(
        path=path,
        filename=filename,
        name=name,
        base=base,
        volumes=volumes,
        title=title,
        icon=icon,
        description=description,
        info_rtf=info_rtf,
        overrides=tuple(parse_overrides(ini.section_lines("OVERRIDES"))),
        overrides_sp=tuple(parse_overrides(ini.section_lines("OVERRIDES_SP"))),
    )