"""Core source assembler: IR, assembly, label resolution, numbering, writing.

WHY: The core package is the only part of bargo with real invariants —
line numbers must be globally consistent and labels must resolve to the
number of the line that follows them. Everything else is I/O glue.

HOW: ir.py defines the data structures, sources.py reads files,
assembler.py concatenates main + dependencies, labels.py builds the label
table, numbering.py assigns numbers and rewrites text, writer.py saves.

RULES:
- numbering.py and labels.py are pure (no I/O)
- Stages are called in order: assemble → resolve → format → write
"""
