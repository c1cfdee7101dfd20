"""Project scaffolding and dependency list editing.

WHY: Starting a project by hand means remembering the manifest keys and
the src/main.bas convention. ``new``/``init`` create a buildable project
in one step; ``add``/``remove`` edit [dependencies] without hand-editing
TOML.

HOW: create_project() makes <dir>/src, writes a default manifest and a
hello-world main file, then runs ``git init`` in the directory.
add_dependency() / remove_dependency() load the manifest, change the
dependency table, and write it back.

RULES:
- An existing <dir>/src means the package already exists (ProjectError)
- init uses the current directory's name as the package name
- add stores the URL, or "" for a local dependency
- remove of an undeclared dependency is a no-op
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from bargo.config import HELLO_PROGRAM, MAIN_FILE, MANIFEST, SRC_DIR
from bargo.errors import ProjectError
from bargo.manifest import Manifest, PackageSettings, read_manifest, write_manifest

logger = logging.getLogger(__name__)

GIT = "git"


def create_project(
    name: Optional[str] = None,
    parent: Path | str = ".",
    on_status: Optional[Callable[[str], None]] = None,
) -> Path:
    """Scaffold a package and return its directory.

    Args:
        name: Directory and package name (``new``); None scaffolds the
              parent directory itself (``init``).
        parent: Directory ``name`` is created in.
        on_status: Optional callback for progress messages.

    Raises:
        ProjectError: The package exists, a file cannot be created, or
                      git cannot be run.
    """
    parent = Path(parent)
    root = parent / name if name else parent
    src = root / SRC_DIR

    if src.exists():
        raise ProjectError("Package already exists")

    try:
        src.mkdir(parents=True)
    except OSError:
        raise ProjectError("Could not create {}".format(src)) from None

    package_name = name if name else root.resolve().name
    manifest = Manifest(package=PackageSettings(name=package_name))
    write_manifest(manifest, root / MANIFEST)

    main_path = src / MAIN_FILE
    try:
        main_path.write_text(HELLO_PROGRAM, encoding="utf-8")
    except OSError:
        raise ProjectError("Could not create {}".format(main_path)) from None

    if on_status:
        on_status("Created `{}` package".format(package_name))

    try:
        subprocess.run([GIT, "init"], cwd=root, capture_output=True, check=False)
    except OSError:
        raise ProjectError("Could not run git to init repo") from None

    return root


def add_dependency(
    dependency: str,
    url: Optional[str] = None,
    project_root: Path | str = ".",
) -> Manifest:
    """Declare ``dependency`` in the manifest and save it."""
    path = Path(project_root) / MANIFEST
    manifest = read_manifest(path)
    manifest.dependencies[dependency] = url or ""
    write_manifest(manifest, path)
    logger.info("Added dependency %s", dependency)
    return manifest


def remove_dependency(dependency: str, project_root: Path | str = ".") -> Manifest:
    """Drop ``dependency`` from the manifest and save it."""
    path = Path(project_root) / MANIFEST
    manifest = read_manifest(path)
    if manifest.dependencies.pop(dependency, None) is None:
        logger.warning("Dependency %s was not declared", dependency)
    write_manifest(manifest, path)
    return manifest
