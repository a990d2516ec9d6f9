import pytest

from gothicstarter.modinfo import (
    IconSpec,
    Override,
    build_info_rtf,
    load_mod,
    parse_icon,
    parse_overrides,
)


def write_ini(directory, name, text):
    path = directory / name
    path.write_text(text, encoding="cp1252")
    return path


def test_missing_vdf_entry_is_not_a_mod(tmp_path):
    path = write_ini(tmp_path, "plain.ini", "[INFO]\nTitle=Nothing\n")
    assert load_mod(path) is None


def test_space_in_filename_is_rejected(tmp_path):
    path = write_ini(tmp_path, "my mod.ini", "[FILES]\nVDF=a.mod\n")
    assert load_mod(path) is None


def test_missing_file_is_not_a_mod(tmp_path):
    assert load_mod(tmp_path / "absent.ini") is None


def test_name_base_and_volumes(tmp_path):
    path = write_ini(tmp_path, "MyMod.ini", "[FILES]\nVDF=one.mod  two.mod\n")
    info = load_mod(path)
    assert info.filename == "MyMod.ini"
    assert info.name == "mymod"
    assert info.base == "mymod"
    assert info.volumes == ("one.mod", "two.mod")
    assert info.aliased is False
    assert info.title == "MyMod.ini"


def test_base_alias_is_lowercased_and_shown_in_title(tmp_path):
    path = write_ini(tmp_path, "Patch.ini", "[FILES]\nVDF=p.mod\n[MOD]\nBase=Original\n")
    info = load_mod(path, mod_version=True)
    assert info.base == "original"
    assert info.aliased is True
    assert info.title == "Patch.ini -> original.ini"


def test_full_version_description_and_info(tmp_path):
    path = write_ini(
        tmp_path,
        "story.ini",
        "[FILES]\nVDF=s.mod\n[INFO]\nTitle=Caf\\'e9\nAuthors=Team\n",
    )
    info = load_mod(path, mod_version=False)
    assert info.description == "<none>"
    assert info.title == "Café"
    assert info.info_rtf.startswith("{\\rtf1")
    assert "Version: <none>" in info.info_rtf
    assert "\\b Team\\par\\b0\n" in info.info_rtf


def test_mod_version_has_no_info_text(tmp_path):
    path = write_ini(tmp_path, "m.ini", "[FILES]\nVDF=m.mod\n[INFO]\nDescription=Hi\n")
    info = load_mod(path, mod_version=True)
    assert info.description == ""
    assert info.info_rtf == ""


def test_overrides_sections(tmp_path):
    path = write_ini(
        tmp_path,
        "o.ini",
        "[FILES]\nVDF=o.mod\n[OVERRIDES]\nGAME.subTitles=1\nbroken=2\n"
        "[OVERRIDES_SP]\nPARAMETERS.Fix=0\n",
    )
    info = load_mod(path)
    assert info.overrides == (Override("GAME", "subTitles", "1"),)
    assert info.overrides_sp == (Override("PARAMETERS", "Fix", "0"),)


def test_gothic1_game_ini_uses_first_builtin_icon(tmp_path):
    path = write_ini(tmp_path, "GothicGame.ini", "[FILES]\nVDF=x.mod\n[INFO]\nIcon=5\n")
    assert load_mod(path, is_gothic1=True).icon == IconSpec(IconSpec.BUILTIN, 0)
    assert load_mod(path, is_gothic1=False).icon == IconSpec(IconSpec.BUILTIN, 5)


def test_parse_overrides_rules():
    lines = ["a.b.c=x=y", "noDot=1", ".key=1", "sec.=1", "S.K"]
    assert parse_overrides(lines) == [
        Override("a", "b.c", "x=y"),
        Override("S", "K", ""),
    ]


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("", IconSpec()),
        ("7", IconSpec(IconSpec.BUILTIN, 7)),
        ("29", IconSpec(IconSpec.BUILTIN, 29)),
        ("30", IconSpec(IconSpec.BUILTIN, 1)),
        ("0", IconSpec(IconSpec.BUILTIN, 1)),
        ("icon.ico,5", IconSpec(IconSpec.FILE, 5, "icon.ico")),
        ("icon.ico,-3", IconSpec(IconSpec.FILE, -3, "icon.ico")),
        ("icon.ico", IconSpec(IconSpec.FILE, 0, "icon.ico")),
        ("app.exe,", IconSpec(IconSpec.FILE, 0, "app.exe")),
    ],
)
def test_parse_icon(spec, expected):
    assert parse_icon(spec) == expected


def test_build_info_rtf_exact():
    text = build_info_rtf("T", "1.0", "", "")
    assert text == (
        "{\\rtf1"
        "\\ansi\\ansicpg1252\\deflang1033\\deff0"
        "{\\fonttbl{\\f0\\fcharset0 MS Shell Dlg;}}\\fs16\\pard\\qc"
        "\\par\n\\par\n"
        "\\b T\\par\\b0\n"
        "Version: 1.0\\par\n\\par\n"
        "\\par\n}\n"
    )


def test_build_info_rtf_optional_parts():
    without = build_info_rtf("T", "", "", "")
    with_extra = build_info_rtf("T", "", "Crew", "site")
    assert "Version: <none>" in without
    assert "\\b Crew\\par\\b0\n" in with_extra
    assert "site\\par\n" in with_extra
    assert "Crew" not in without
    assert with_extra.endswith("\\par\n}\n")