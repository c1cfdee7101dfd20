"""Bargo — build system and package manager for line-numbered BASIC.

WHY: BBC BASIC on the Agon has no module system and no symbolic labels.
Bargo lets a project keep its program in a plain ``src/main.bas`` plus
reusable dependency files, and assembles them into one numbered program
the interpreter can load.

HOW: Four-stage pipeline — assemble (main + bannered dependencies),
resolve labels, number/format, write. Each stage is independently
testable; the CLI and project commands are thin glue around it.

RULES:
- The assembled document is a flat list; label targets are index arithmetic
- Dependency order is always sorted by name (reproducible builds)
- Stages run strictly in sequence; no concurrent builds of one project
"""

__version__ = "0.1.0"
