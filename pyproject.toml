[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termscreen"
version = "0.1.0"
description = "A VT100-style terminal screen model with history, selection and scrollable windows"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["terminal", "vt100", "screen", "emulator", "scrollback", "selection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["termscreen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
