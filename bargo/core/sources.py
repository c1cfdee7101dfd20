"""Line source and dependency resolution.

WHY: The assembler works on lists of strings; something has to turn the
files under src/ into those lists and report missing or undecodable files
with a message the user can act on.

HOW: read_lines() reads a file as bytes and splits it the same way the
interpreter's loader does: on "\\n", dropping one trailing "\\r" per line
and ignoring the empty piece after a final newline. Each line is decoded
separately so a bad byte can be reported with its line number.
DependencyResolver maps a dependency name to src/<name>.bas and emits its
banner followed by its body.

RULES:
- Missing file → MissingSourceError naming the path
- Undecodable line → MalformedLineError naming path and 1-based line
- Banner: ":", REM + 76 "=", "REM IMPORT <NAME>.BAS", REM + 76 "=", ":"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from bargo.config import BASIC_EXT
from bargo.core.ir import Dependency
from bargo.errors import MalformedLineError, MissingSourceError

logger = logging.getLogger(__name__)

BANNER_RULE_LENGTH = 76
NO_OP = ":"


def read_lines(path: Path | str, hint: str | None = None) -> List[str]:
    """Read a UTF-8 source file into a list of lines.

    Args:
        path: File to read.
        hint: Extra sentence appended to the MissingSourceError message.

    Returns:
        Lines without terminators, in file order.

    Raises:
        MissingSourceError: The file cannot be opened.
        MalformedLineError: A line is not valid UTF-8.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError:
        raise MissingSourceError(path, hint) from None

    chunks = data.split(b"\n")
    if chunks and chunks[-1] == b"":
        chunks.pop()

    lines: List[str] = []
    for number, chunk in enumerate(chunks, start=1):
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        try:
            lines.append(chunk.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise MalformedLineError(path, number, exc.reason) from exc

    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


def banner_lines(name: str) -> List[str]:
    """Return the five-line comment block placed before a dependency body."""
    rule = "REM " + "=" * BANNER_RULE_LENGTH
    return [
        NO_OP,
        rule,
        "REM IMPORT {}{}".format(name.upper(), BASIC_EXT.upper()),
        rule,
        NO_OP,
    ]


class DependencyResolver:
    """Locates dependency files under the project's source directory.

    WHY: Dependencies are materialized on disk (by hand or by the fetch
    step) before assembly. The resolver owns the naming convention so the
    assembler and the fetcher agree on where each file lives.

    RULES:
    - Path convention: <source_dir>/<name>.bas
    - Missing files report the path and where the file is expected
    """

    def __init__(self, source_dir: Path | str) -> None:
        self.source_dir = Path(source_dir)

    def path_for(self, dependency: Dependency) -> Path:
        return self.source_dir / "{}{}".format(dependency.name, BASIC_EXT)

    def bannered_lines(self, dependency: Dependency) -> List[str]:
        """Return the dependency's banner followed by its file's lines."""
        path = self.path_for(dependency)
        body = read_lines(
            path,
            hint="Make sure this dep exists in {}/".format(self.source_dir.name),
        )
        return banner_lines(dependency.name) + body
