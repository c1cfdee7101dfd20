"""Build and clean orchestration.

WHY: The build is the one command users run constantly. It wires the
manifest, the fetcher and the core stages together in the only order
that is correct: fetch → assemble → resolve labels → format → write.

HOW: build_project() reads the manifest (unless one is passed in),
downloads remote dependencies into src/, reads src/main.bas, then runs
the core pipeline and writes <name>.bas at the project root.

RULES:
- Remote dependencies are fetched, in name order, before assembly starts
- Label resolution only runs when [package].labels is true
- Nothing is written unless assembly succeeded
- Two concurrent builds of the same project produce undefined output;
  there is no locking
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import List, Optional

from bargo.config import BASIC_EXT, MAIN_FILE, MANIFEST, SRC_DIR
from bargo.core.assembler import assemble, sort_dependencies
from bargo.core.ir import AssembledDocument, Dependency, NumberedLine
from bargo.core.labels import resolve_labels
from bargo.core.numbering import format_document
from bargo.core.sources import DependencyResolver, read_lines
from bargo.core.writer import write_program
from bargo.errors import ProjectError
from bargo.fetch.client import DependencyFetcher
from bargo.manifest import Manifest, read_manifest

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


def output_path(project_root: Path, manifest: Manifest) -> Path:
    return project_root / "{}{}".format(manifest.package.name, BASIC_EXT)


def fetch_dependencies(
    dependencies: List[Dependency],
    resolver: DependencyResolver,
    fetcher: Optional[DependencyFetcher] = None,
    on_status: Optional[StatusCallback] = None,
) -> None:
    """Download every remote dependency into the source directory.

    Local-only dependencies are skipped. A fetcher is opened only when at
    least one dependency has a URL.
    """
    remote = [dep for dep in sort_dependencies(dependencies) if dep.is_remote]
    if not remote:
        return

    with (fetcher or DependencyFetcher()) as client:
        for dependency in remote:
            client.fetch(
                dependency.source_url,
                resolver.path_for(dependency),
                on_status=on_status,
            )


def compile_program(
    main_lines: List[str],
    dependencies: List[Dependency],
    resolver: DependencyResolver,
    manifest: Manifest,
) -> List[NumberedLine]:
    """Run assemble → resolve → format without touching the output file."""
    settings = manifest.package
    document: AssembledDocument = assemble(main_lines, dependencies, resolver)
    labels = resolve_labels(document, settings.numbering) if settings.labels else {}
    return format_document(document, labels, settings.numbering, settings.width)


def build_project(
    project_root: Path | str = ".",
    manifest: Optional[Manifest] = None,
    fetcher: Optional[DependencyFetcher] = None,
    on_status: Optional[StatusCallback] = None,
) -> Path:
    """Build the package in ``project_root`` and return the output path.

    Args:
        project_root: Folder containing Bargo.toml and src/.
        manifest: Pre-loaded manifest; read from disk when omitted.
        fetcher: Fetcher for remote dependencies (tests inject one).
        on_status: Optional callback for progress messages.

    Raises:
        ManifestError, MissingSourceError, FetchError, MalformedLineError,
        OutputWriteError: see bargo.errors. Any of them means the build
        failed and the output file must not be trusted.
    """
    root = Path(project_root)
    if manifest is None:
        manifest = read_manifest(root / MANIFEST)
    settings = manifest.package

    if on_status:
        on_status("Building {} v{}".format(settings.name, settings.version))

    resolver = DependencyResolver(root / SRC_DIR)
    dependencies = manifest.dependency_list()
    fetch_dependencies(dependencies, resolver, fetcher, on_status)

    main_lines = read_lines(root / SRC_DIR / MAIN_FILE)
    numbered = compile_program(main_lines, dependencies, resolver, manifest)

    path = write_program(numbered, output_path(root, manifest), settings.line_terminator)
    logger.info("Built %s (%d lines)", path, len(numbered))

    if on_status:
        on_status("Finished")
    return path


def clean_project(
    project_root: Path | str = ".",
    manifest: Optional[Manifest] = None,
    on_status: Optional[StatusCallback] = None,
) -> Path:
    """Remove the generated <name>.bas file.

    Raises:
        ProjectError: The file does not exist or cannot be removed.
    """
    root = Path(project_root)
    if manifest is None:
        manifest = read_manifest(root / MANIFEST)

    path = output_path(root, manifest)
    try:
        path.unlink()
    except OSError:
        raise ProjectError("Could not remove {}".format(path.name)) from None

    if on_status:
        on_status("Removed {}".format(path.name))
    return path
