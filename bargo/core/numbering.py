"""Line numbering, label rewriting, and banner truncation.

WHY: The interpreter needs every line to carry a number, and jumps must
use numbers rather than the symbolic labels the programmer wrote. This
is the last transformation before the program is written out.

HOW: A single pass over the assembled document. The number column width
is fixed up front from the largest number that will appear, so no line
ever needs re-justifying. Each line is classified by its text:

  LABEL declaration → ":" placeholder (keeps its numbered slot)
  REM ...=          → banner rule, truncated to fit the display width
  anything else     → "GOTO <label>" / "GOSUB <label>" replaced by numbers

RULES:
- number = (i + 1) * step for 0-based position i
- width = digit count of len(document) * step
- Banner rules keep at most display_width - (width + 3) characters
- Substitution is a plain substring replace, not token-aware: a label
  name inside a string literal or a longer identifier is rewritten too
- All labels are substituted in one pass, longest name first, so "GOTO loop"
  cannot clobber "GOTO loop2" and an inserted number is never rescanned
- Unknown labels are left as written
- Pure function; no I/O
"""

from __future__ import annotations

import re
from typing import List, Optional

from bargo.core.ir import AssembledDocument, LabelTable, NumberedLine
from bargo.core.labels import is_label_declaration
from bargo.core.sources import NO_OP

# Number column, the separating space, and one column of slack.
SEPARATOR_OVERHEAD = 3

JUMP_KEYWORDS = ("GOTO", "GOSUB")


def number_width(line_count: int, step: int) -> int:
    """Digit count of the largest line number in the output."""
    return len(str(line_count * step))


def is_banner_rule(text: str) -> bool:
    return text[:3].upper() == "REM" and text.endswith("=")


def truncate_banner(text: str, width: int, display_width: int) -> str:
    """Cut a banner rule so the numbered line fits on one screen row."""
    limit = max(0, display_width - (width + SEPARATOR_OVERHEAD))
    return text[:limit]


def jump_pattern(labels: LabelTable) -> Optional[re.Pattern[str]]:
    """Compile one alternation matching every ``GOTO <name>`` / ``GOSUB <name>``.

    Names are tried longest first so "GOTO loop2" is never matched as
    "GOTO loop". Returns None when there is nothing to substitute.
    """
    names = sorted((n for n in labels if n), key=lambda n: (-len(n), n))
    if not names:
        return None
    return re.compile("({}) ({})".format(
        "|".join(JUMP_KEYWORDS),
        "|".join(re.escape(name) for name in names),
    ))


def rewrite_jumps(text: str, pattern: re.Pattern[str], labels: LabelTable) -> str:
    """Replace every symbolic GOTO/GOSUB target with its line number.

    A single left-to-right pass: inserted numbers are never rescanned.
    """
    def _target(match: re.Match[str]) -> str:
        keyword, name = match.group(1), match.group(2)
        return "{} {}".format(keyword, labels[name].target_line_number)

    return pattern.sub(_target, text)


def format_document(
    document: AssembledDocument,
    labels: LabelTable,
    step: int,
    display_width: int,
) -> List[NumberedLine]:
    """Assign line numbers and rewrite text for every assembled line.

    Args:
        document: Output of the assembler.
        labels: Output of resolve_labels(), or an empty table when label
                support is disabled.
        step: Numbering step (positive).
        display_width: Target screen width in characters.

    Returns:
        One NumberedLine per document line, in order.
    """
    width = number_width(len(document), step)
    pattern = jump_pattern(labels)
    numbered: List[NumberedLine] = []

    for line in document:
        text = line.text
        if is_label_declaration(text):
            text = NO_OP
        elif is_banner_rule(text):
            text = truncate_banner(text, width, display_width)
        elif pattern is not None:
            text = rewrite_jumps(text, pattern, labels)

        numbered.append(NumberedLine(
            number=(line.index + 1) * step,
            text=text,
            width=width,
        ))

    return numbered
