import os

import pytest

from gothicstarter.commandline import (
    StartupArgs,
    build_command,
    executable_name,
    format_launch_error,
    parse_startup_args,
)
from gothicstarter.settings import Options, zlog_argument


def test_empty_command_line_defaults():
    args = parse_startup_args("")
    assert args == StartupArgs()
    assert args.auto_focus == "GothicGame.ini"


def test_none_command_line():
    assert parse_startup_args(None).auto_start is False


def test_game_and_start():
    args = parse_startup_args("-game:MyMod -start")
    assert args.auto_focus == "MyMod.ini"
    assert args.auto_start is True
    assert args.auto_close is True


def test_game_name_keeps_ini_suffix():
    assert parse_startup_args("-game:mod.ini").auto_focus == "mod.ini"


def test_game_name_stops_at_quote():
    args = parse_startup_args('"-game:abc.ini" -start')
    assert args.auto_focus == "abc.ini"


def test_spacer_requires_start():
    assert parse_startup_args("-game:x -spacer").run_spacer is False
    assert parse_startup_args("-game:x -start -spacer").run_spacer is True


def test_no_start_means_no_auto_close():
    args = parse_startup_args("-game:x")
    assert args.auto_start is False
    assert args.auto_close is False


@pytest.mark.parametrize(
    "is_gothic1, spacer, expected",
    [
        (True, False, "GothicMod.exe"),
        (False, False, "Gothic2.exe"),
        (True, True, "Spacer.exe"),
        (False, True, "Spacer2.exe"),
    ],
)
def test_executable_name(is_gothic1, spacer, expected):
    assert executable_name(is_gothic1, spacer) == expected


def test_command_quotes_program_and_names_base():
    cmd = build_command("appdir", "mymod")
    program = os.path.join("appdir", "Gothic2.exe")
    assert cmd.startswith(f'"{program}" ')
    assert cmd.endswith("-game:mymod.ini")


def test_command_switch_order():
    options = Options(
        parameters="-extra",
        reparse=True,
        window=True,
        no_music=True,
        no_sound=True,
        log_level=3,
        physical_first=True,
        texconvert=True,
        autoconvert=True,
        convert_all=True,
    )
    cmd = build_command("d", "m", options, is_gothic1=True)
    order = [
        "-game:m.ini",
        "-zreparse",
        "-zwindow",
        "-znomusic",
        "-znosound",
        zlog_argument(3),
        "-ztexconvert",
        "-zautoconvertdata",
        "-zconvertall",
        "-vdfs:physicalfirst",
        "-extra",
    ]
    positions = [cmd.index(item) for item in order]
    assert positions == sorted(positions)
    assert "GothicMod.exe" in cmd


def test_command_omits_log_when_off():
    cmd = build_command("d", "m", Options(log_level=0))
    assert "-zlog:" not in cmd


def test_parameters_dropped_on_auto_close():
    cmd = build_command("d", "m", Options(parameters="-extra"), auto_close=True)
    assert "-extra" not in cmd


def test_error_breaks_line_before_game_switch():
    text = format_launch_error('"C:/g/Gothic2.exe" -game:mod.ini', "boom")
    assert "\n-game:mod.ini" in text
    assert text.endswith("\n\nboom")
    assert " -game:" not in text


def test_error_truncates_long_command():
    text = format_launch_error("x" * 2000, "boom")
    assert text.startswith("x" * 1024 + " [...]\n\n")
    assert "x" * 1025 not in text
    assert text.endswith("boom")


def test_error_without_game_switch_is_plain():
    assert format_launch_error("cmd", "msg") == "cmd\n\nmsg"