[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gothicstarter"
version = "2.8.0"
description = "Mod starter for Gothic: finds mod .ini files, swaps mod volumes in and out, and launches the game"
requires-python = ">=3.10"
dependencies = []
keywords = ["gothic", "mods", "launcher", "game", "vdf"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gothicstarter = "gothicstarter.launcher:main"

[tool.hatch.build.targets.wheel]
packages = ["gothicstarter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
