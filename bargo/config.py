"""Configuration constants, project layout, and .env loading.

WHY: Centralizes the fixed project layout (manifest name, source folder,
file extension) and the tunable defaults so they are easy to find and
override. The layout is plain data — not buried in the commands.

HOW: python-dotenv loads the .env file on import. Constants are module
level strings and ints; defaults that users may want to change per
machine (emulator folder, fetch timeout) read from environment variables.

RULES:
- Project layout: Bargo.toml + src/main.bas, output <name>.bas at the root
- All defaults can be overridden via BARGO_* environment variables
- Overrides are read when used, not on import; bad values raise ConfigError
- Numbering and width defaults must be positive integers
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv

from bargo.errors import ConfigError

# Load .env from the project root (where the command is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Project layout
# ---------------------------------------------------------------------------

MANIFEST = "Bargo.toml"
SRC_DIR = "src"
BASIC_EXT = ".bas"
MAIN_FILE = "main" + BASIC_EXT
HELLO_PROGRAM = 'PRINT "Hello World!"'
DEFAULT_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Emulator
# ---------------------------------------------------------------------------

EMU_BINARY = "fab-agon-emulator"
EMU_ARGS = ["-f", "--sdcard", "./sdcard"]
EMU_SDCARD = "sdcard"
AUTOEXEC = "autoexec.txt"

# ---------------------------------------------------------------------------
# Build defaults
# ---------------------------------------------------------------------------

CRLF = "\r\n"
LF = "\n"

DEFAULT_NUMBERING = 10
DEFAULT_WIDTH = 80
FETCH_TIMEOUT_S = 30.0


def _positive_env(name: str, default: float, convert: Callable[[str], float]) -> float:
    """Read a positive number from the environment, or return ``default``.

    RULES:
    - Unset or blank → default
    - Not a number, zero, or negative → ConfigError naming the variable
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = convert(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise ConfigError(
            "{} must be a positive number, got {!r}. "
            "Fix it in the environment or the .env file.".format(name, raw)
        )
    return value


def default_numbering() -> int:
    """Numbering step for manifests that do not set one (BARGO_DEFAULT_NUMBERING)."""
    return int(_positive_env("BARGO_DEFAULT_NUMBERING", DEFAULT_NUMBERING, int))


def default_width() -> int:
    """Display width for manifests that do not set one (BARGO_DEFAULT_WIDTH)."""
    return int(_positive_env("BARGO_DEFAULT_WIDTH", DEFAULT_WIDTH, int))


def fetch_timeout() -> float:
    return _positive_env("BARGO_FETCH_TIMEOUT", FETCH_TIMEOUT_S, float)


def default_emu_path() -> Path:
    """Return the emulator folder used when the manifest does not name one.

    BARGO_EMU_PATH wins; otherwise ``~/fab-agon-emulator``.
    """
    override = os.getenv("BARGO_EMU_PATH", "").strip()
    if override:
        return Path(override)
    return Path.home() / EMU_BINARY


def line_terminator(carriage_return: bool) -> str:
    """Map the manifest's carriage_return flag to a line terminator."""
    return CRLF if carriage_return else LF
