"""Bargo.toml model, loading, and saving.

WHY: Every command except ``new`` starts from the project manifest. A
typed model gives one place to apply defaults and reject bad values
(zero numbering step, negative width) with a clear message instead of a
confusing failure deep inside the build.

HOW: tomllib parses the file, pydantic validates it into Manifest /
PackageSettings, and tomli-w serializes it back for the commands that
edit it (add, remove, new, init).

RULES:
- [package].name is required; every other key has a default
- numbering and width must be positive integers, defaults included
  (BARGO_DEFAULT_* overrides are checked too; bad values raise ConfigError)
- [dependencies] maps name → URL string; "" means local-only
- dependency_list() is always sorted by name
- Missing file → ManifestError("Could not open ..."); bad content →
  ManifestError("Syntax error in ...")
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Dict, List

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from bargo.config import (
    DEFAULT_VERSION,
    default_emu_path,
    default_numbering,
    default_width,
    line_terminator,
)
from bargo.core.ir import Dependency
from bargo.errors import ManifestError

logger = logging.getLogger(__name__)


class PackageSettings(BaseModel):
    """The [package] table."""

    name: str = Field(description="Package name; the output file is <name>.bas.")
    version: str = Field(default=DEFAULT_VERSION, description="Package version.")
    carriage_return: bool = Field(
        default=True,
        description="Terminate output lines with CRLF (true) or LF (false).",
    )
    numbering: int = Field(
        default_factory=default_numbering,
        gt=0,
        validate_default=True,
        description="Increment between consecutive line numbers.",
    )
    width: int = Field(
        default_factory=default_width,
        gt=0,
        validate_default=True,
        description="Display width used to truncate banner rules.",
    )
    labels: bool = Field(
        default=True,
        description="Resolve LABEL declarations and symbolic GOTO/GOSUB targets.",
    )
    emu_path: Path = Field(
        default_factory=default_emu_path,
        description="Folder containing the fab-agon-emulator binary.",
    )

    @property
    def line_terminator(self) -> str:
        return line_terminator(self.carriage_return)


class Manifest(BaseModel):
    """The whole Bargo.toml document."""

    package: PackageSettings
    dependencies: Dict[str, str] = Field(
        default_factory=dict,
        description="Dependency name → download URL ('' for local files).",
    )

    def dependency_list(self) -> List[Dependency]:
        """Return declared dependencies sorted by name."""
        return [
            Dependency(name=name, source_url=self.dependencies[name] or None)
            for name in sorted(self.dependencies)
        ]

    def to_toml(self) -> str:
        data = self.model_dump(mode="json")
        return tomli_w.dumps(data)


def read_manifest(path: Path | str) -> Manifest:
    """Load and validate a manifest file.

    Raises:
        ManifestError: The file is missing, is not valid TOML, or fails
                       validation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        raise ManifestError("Could not open {}".format(path.name)) from None

    try:
        data = tomllib.loads(text)
        manifest = Manifest.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as exc:
        logger.debug("Manifest %s rejected: %s", path, exc)
        raise ManifestError("Syntax error in {}: {}".format(path.name, _first_line(exc))) from exc

    return manifest


def write_manifest(manifest: Manifest, path: Path | str) -> Path:
    """Serialize ``manifest`` to ``path``.

    Raises:
        ManifestError: The file cannot be written.
    """
    path = Path(path)
    try:
        path.write_text(manifest.to_toml(), encoding="utf-8")
    except OSError as exc:
        raise ManifestError("Could not write to {}".format(path.name)) from exc
    return path


def _first_line(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        return "{}: {}".format(location, error["msg"])
    text = str(exc).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__
