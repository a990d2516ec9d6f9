# gothicstarter

A command-line starter for Gothic and Gothic II modifications. You run it
against the game's `System` directory. It finds every mod description there:
an `*.ini` file whose name has no space and that has a `[FILES] VDF=` entry.
When you start a mod, the starter does the following:

- moves every `Data/*.mod` into `Data/modvdf`, then moves the mod's volumes
  back into `Data`
- if the mod names a different `[MOD] Base=`, copies the mod file over
  `<base>.ini` and puts the original file aside
- writes the mod's `[OVERRIDES]` into `Gothic.ini` and its `[OVERRIDES_SP]`
  into `SystemPack.ini`. It changes only keys that already hold a value.
- on Gothic II, restores a saved `vdfs_<base>.dmp` to `VDFS.DMP`
- runs the game with `-game:<base>.ini` and waits for it to exit

After the game exits, the starter undoes all of these steps. On Gothic II it
also saves `VDFS.DMP` as `vdfs_<base>.dmp` when `Gothic.ini` reports a normal
exit. If `Gothic2.exe` is missing from the directory, the installation is
treated as Gothic 1.

## Installation

```
pip install .
```

## Usage

```
gothicstarter --dir "C:/Games/Gothic II/System"
gothicstarter --dir "C:/Games/Gothic II/System" -game:MyMod.ini -start
```

If you give no `--dir`, the starter uses the current directory.

With no start request, the starter lists the mods it found, one title per
line. `GothicGame.ini` comes first and the rest follow in name order. The
focused mod is marked with `*`. A mod that runs under another base file is
shown as `file.ini -> base.ini`.

| Option | Meaning |
| --- | --- |
| `-game:<name>` | Mod to focus on. `.ini` is added when missing. Default `GothicGame.ini`. |
| `-start` | Start the focused mod. Extra parameters from the options file are left out. |
| `-spacer` | Used with `-start`: run `Spacer.exe` or `Spacer2.exe` in place of the game. |
| `--play` | Start the focused mod and keep the extra parameters. |
| `--dir PATH` | Directory that holds the game executables and mod files. |
| `--options PATH` | Options file to read. Default `~/.gothicstarter.ini`. |

If the focused file does not exist, the starter reports it and lists the mods
instead. If the file exists but is not a mod, the command exits with status 1.
It also exits with status 1 if the game cannot be started.

When the log level is above 0, the starter adds `-zlog:<n>,s` to the game's
command line. If `zSpy.exe` is found in `_work/tools/zSpy` or in the `System`
directory and is not already running, the starter launches it too.

## Options file

Launch options are kept in an INI file, under section `[GothicStarter]`:

```
[GothicStarter]
Options.Parameter=-zmaxframerate:60
Options.LogLevel=2
Options.Reparse=0
Options.Window=1
Options.NoMusic=0
Options.NoSound=0
Options.Physical=0
```

These keys map to `-zreparse`, `-zwindow`, `-znomusic`, `-znosound` and
`-vdfs:physicalfirst`. `LogLevel` is a number from 0 to 4. Use
`gothicstarter.settings.load_options` to read the file and `save_options` to
write it. The `Options` fields `texconvert`, `autoconvert` and `convert_all`
are never stored.

## Library use

```python
from gothicstarter.launcher import GameLayout, discover_mods, launch_mod
from gothicstarter.settings import Options

layout = GameLayout.detect("C:/Games/Gothic II/System")
mods = discover_mods(layout, mod_version=True)
code = launch_mod(layout, mods[0], Options(window=True))
```

`launch_mod` returns the game's exit code. It returns `None` if another
launch is already in progress. It raises `gothicstarter.launcher.LaunchError`
if the game cannot be started; the installation is restored in every case. If
you want to run the command yourself, pass a `runner(command, cwd)` that
returns an exit code.

Other modules:

- `gothicstarter.modinfo.load_mod` reads one mod description into a `ModInfo`.
  With `mod_version=False` it also builds the description and an RTF info text.
- `gothicstarter.launcher.prepared_mod` is a context manager. It sets up the
  installation for a mod and undoes the setup on exit.
- `gothicstarter.ini.IniFile` reads and writes profile-style INI files.
- `gothicstarter.commandline.build_command` builds the game command line.
  `parse_startup_args` parses the starter's own arguments.
- `gothicstarter.files.move_mod_files` parks and enables `.mod` volumes.

## What it does not do

There is no graphical window. The starter has no mod list to click, no
description or info box, and does not store a window position. You cannot
change launch options from the command line. Edit the options file, or call
`save_options`.

## Tests

```
pip install .[test]
pytest
```