"""Label declaration scanning and target resolution.

WHY: Bargo lets programs jump to ``LABEL name`` instead of hard-coded
line numbers. Labels may be declared after their first use — even in a
different dependency — so the whole document is scanned once before any
line is rewritten.

HOW: Each declaration line stays in the output as a ":" placeholder and
therefore keeps its own numbered slot. The line after the declaration at
0-based position i is the (i + 2)-th line, so its number is (i + 2) * step.

RULES:
- A declaration is any line whose text starts with "label " (any case)
- The name is everything after the keyword and its single space, verbatim
- Duplicate names: the last declaration wins and a warning is logged
- A declaration with an empty name is ignored with a warning (it still
  becomes a ":" placeholder)
"""

from __future__ import annotations

import logging

from bargo.core.ir import AssembledDocument, LabelEntry, LabelTable

logger = logging.getLogger(__name__)

LABEL_KEYWORD = "LABEL "


def is_label_declaration(text: str) -> bool:
    """Return True if the line declares a label."""
    return text[: len(LABEL_KEYWORD)].upper() == LABEL_KEYWORD


def label_name(text: str) -> str:
    """Return the label name of a declaration line."""
    return text[len(LABEL_KEYWORD):]


def resolve_labels(document: AssembledDocument, step: int) -> LabelTable:
    """Build the label table for an assembled document.

    Args:
        document: The flat document from the assembler.
        step: Numbering step (line number increment).

    Returns:
        Mapping of label name to its LabelEntry.
    """
    table: LabelTable = {}

    for line in document:
        if not is_label_declaration(line.text):
            continue
        name = label_name(line.text)
        if not name:
            logger.warning(
                "Label at line %d has no name and is ignored",
                (line.index + 1) * step,
            )
            continue
        entry = LabelEntry(
            name=name,
            declaration_index=line.index,
            target_line_number=(line.index + 2) * step,
        )
        previous = table.get(name)
        if previous is not None:
            logger.warning(
                "Label %r declared again at line %d (first at line %d); "
                "jumps will go to the later declaration",
                name,
                (line.index + 1) * step,
                (previous.declaration_index + 1) * step,
            )
        table[name] = entry

    logger.debug("Resolved %d labels", len(table))
    return table
