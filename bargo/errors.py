"""Exception hierarchy for bargo.

WHY: Every failure a user can cause (missing file, bad manifest, failed
download) must reach the CLI as one readable message. A shared base class
lets the CLI catch exactly those and let programming errors propagate.

RULES:
- All user-facing failures derive from BargoError
- Messages are complete sentences fit for printing as-is
- Any BargoError during a build means the output is not trustworthy
"""

from __future__ import annotations

from pathlib import Path


class BargoError(Exception):
    """Base class for all user-facing bargo failures."""


class MissingSourceError(BargoError):
    """Raised when the main file or a dependency file cannot be opened.

    Carries the attempted path so callers can report it.
    """

    def __init__(self, path: Path | str, hint: str | None = None) -> None:
        self.path = Path(path)
        self.hint = hint
        message = "Could not open {}".format(path)
        if hint:
            message = "{}\n{}".format(message, hint)
        super().__init__(message)


class FetchError(MissingSourceError):
    """Raised when a remote dependency cannot be downloaded.

    A failed fetch is treated exactly like a missing local file.
    """

    def __init__(self, url: str, path: Path | str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        self.path = Path(path)
        self.hint = None
        message = "Could not fetch {}".format(url)
        if reason:
            message = "{} ({})".format(message, reason)
        BargoError.__init__(self, message)


class MalformedLineError(BargoError):
    """Raised when a source line cannot be decoded as UTF-8."""

    def __init__(self, path: Path | str, line_number: int, reason: str) -> None:
        self.path = Path(path)
        self.line_number = line_number
        super().__init__(
            "Could not read line {} of {}: {}".format(line_number, path, reason)
        )


class OutputWriteError(BargoError):
    """Raised when the output file cannot be created or written."""

    def __init__(self, path: Path | str, reason: str | None = None) -> None:
        self.path = Path(path)
        message = "Could not write to {}".format(path)
        if reason:
            message = "{} ({})".format(message, reason)
        super().__init__(message)


class ManifestError(BargoError):
    """Raised when Bargo.toml is missing, malformed, or cannot be saved."""


class ProjectError(BargoError):
    """Raised by the project commands (new, init, clean, emu, add, remove)."""


class ConfigError(BargoError):
    """Raised when a BARGO_* environment override has an invalid value."""
