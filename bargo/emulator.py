"""Runs a built program inside fab-agon-emulator.

WHY: Testing a BASIC program means copying it onto the emulator's
virtual sdcard and booting straight into it. Doing that by hand after
every build is tedious.

HOW: Copy <name>.bas into <emu_path>/sdcard/, write an autoexec.txt that
loads it with bbcbasic, then start the emulator from its own folder.

RULES:
- emu_path must exist; the error tells the user where to configure it
- The program must have been built first
- autoexec.txt always uses CRLF (the emulator's MOS expects it)
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from bargo.config import AUTOEXEC, BASIC_EXT, CRLF, EMU_ARGS, EMU_BINARY, EMU_SDCARD, MANIFEST
from bargo.errors import ProjectError
from bargo.manifest import Manifest, read_manifest


def run_emulator(
    project_root: Path | str = ".",
    manifest: Optional[Manifest] = None,
) -> subprocess.CompletedProcess:
    """Install the built program on the emulator's sdcard and run it.

    Raises:
        ProjectError: The emulator folder is missing, the program has not
                      been built, or the emulator cannot be started.
    """
    root = Path(project_root)
    if manifest is None:
        manifest = read_manifest(root / MANIFEST)

    emu_path = manifest.package.emu_path
    if not emu_path.exists():
        raise ProjectError(
            "Could not find the emulator in {}\n"
            "Specify the full path to the emulator's folder in {}".format(emu_path, MANIFEST)
        )

    program = "{}{}".format(manifest.package.name, BASIC_EXT)
    sdcard = emu_path / EMU_SDCARD
    try:
        shutil.copy(root / program, sdcard / program)
    except OSError:
        raise ProjectError(
            "Could not copy source to emulator\n"
            "Go to project's root folder and/or build first"
        ) from None

    autoexec = sdcard / AUTOEXEC
    try:
        with open(autoexec, "w", encoding="utf-8", newline="") as output:
            output.write("bbcbasic /{}{}".format(program, CRLF))
    except OSError:
        raise ProjectError("Could not write to {}".format(autoexec)) from None

    try:
        return subprocess.run(
            [str(emu_path / EMU_BINARY), *EMU_ARGS],
            cwd=emu_path,
            capture_output=True,
            check=False,
        )
    except OSError:
        raise ProjectError("Could not run emulator") from None
