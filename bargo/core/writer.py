"""Writes the numbered program to disk.

WHY: The target loader expects a specific line terminator (CRLF on the
Agon's FAT sdcard by default), so the writer must never translate
newlines behind the caller's back.

HOW: Opens the destination with newline="" so the terminator is written
byte-for-byte, renders each NumberedLine, and appends the terminator. On
failure the partial file is removed before OutputWriteError is raised.

RULES:
- Creates or overwrites the destination
- Each line, including the last, is followed by the terminator
- A failed write never leaves a partial file behind
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from bargo.core.ir import NumberedLine
from bargo.errors import OutputWriteError

logger = logging.getLogger(__name__)


def write_program(
    lines: Iterable[NumberedLine],
    path: Path | str,
    line_terminator: str,
) -> Path:
    """Write rendered lines to ``path`` and return it.

    Raises:
        OutputWriteError: The file cannot be created or written.
    """
    path = Path(path)
    try:
        output = open(path, "w", encoding="utf-8", newline="")
    except OSError as exc:
        raise OutputWriteError(path, exc.strerror) from exc

    try:
        with output:
            for line in lines:
                output.write(line.render())
                output.write(line_terminator)
    except OSError as exc:
        path.unlink(missing_ok=True)
        raise OutputWriteError(path, exc.strerror) from exc

    logger.debug("Wrote %s", path)
    return path
