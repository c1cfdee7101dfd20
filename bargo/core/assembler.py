"""Document assembly: main source followed by bannered dependencies.

WHY: BBC BASIC has no import statement. The only way to reuse code is to
paste it into the program, so the build concatenates the main file with
every dependency, each introduced by a banner so the listing stays
readable on the target machine.

HOW: assemble() appends the main lines verbatim, then sorts the
dependencies by name and appends each one's banner + body as produced by
the DependencyResolver. The result is a flat AssembledDocument.

RULES:
- Main lines first, unmodified
- Dependencies sorted by name, whatever order the caller passes them in
- Any unreadable file aborts the whole assembly
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from bargo.core.ir import AssembledDocument, Dependency
from bargo.core.sources import DependencyResolver

logger = logging.getLogger(__name__)


def sort_dependencies(dependencies: Iterable[Dependency]) -> List[Dependency]:
    """Return dependencies in the canonical build order (by name)."""
    return sorted(dependencies, key=lambda dep: dep.name)


def assemble(
    main_lines: Sequence[str],
    dependencies: Iterable[Dependency],
    resolver: DependencyResolver,
) -> AssembledDocument:
    """Concatenate the main file with every dependency block.

    Args:
        main_lines: Lines of src/main.bas.
        dependencies: Declared dependencies, in any order.
        resolver: Locates and reads each dependency's file.

    Returns:
        The AssembledDocument, ready for label resolution.

    Raises:
        MissingSourceError: A dependency file cannot be opened.
        MalformedLineError: A dependency line is not valid UTF-8.
    """
    document = AssembledDocument()
    document.extend(list(main_lines))

    for dependency in sort_dependencies(dependencies):
        block = resolver.bannered_lines(dependency)
        logger.debug("Imported %s (%d lines)", dependency.name, len(block))
        document.extend(block)

    logger.debug("Assembled %d lines", len(document))
    return document
