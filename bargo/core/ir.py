"""Intermediate representation dataclasses for assembled BASIC programs.

WHY: The assembler, label resolver and formatter each need the same view
of the program — a flat, indexable list of lines. Label targets are pure
index arithmetic over that list, so the IR is an arena, not a tree.

HOW: Five small dataclasses:
  RawLine           — one source line and its 0-based position in the document
  Dependency        — a declared dependency (name + optional download URL)
  AssembledDocument — main lines followed by every bannered dependency
  LabelEntry        — one resolved label declaration
  NumberedLine      — one final output line (number + text + column width)

RULES:
- RawLine is immutable once produced
- AssembledDocument.lines[i].index == i for every i
- NumberedLine.render() right-justifies the number in ``width`` columns
- All entities live for a single build invocation only
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass(frozen=True)
class RawLine:
    """A single line of source text at a fixed position in the document."""

    index: int
    text: str


@dataclass(frozen=True)
class Dependency:
    """A declared dependency from the manifest's [dependencies] table.

    RULES:
    - name: file stem under src/ (``strings`` → ``src/strings.bas``)
    - source_url: when set, the file is downloaded before assembly
    - assembly always reads the local file, never the URL
    """

    name: str
    source_url: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return bool(self.source_url)


@dataclass
class AssembledDocument:
    """The flat, ordered line sequence produced before numbering.

    WHY: Jump targets are computed from line positions, so the whole
    program must be laid out before any number is assigned.

    RULES:
    - Main file lines come first, unmodified
    - Each dependency contributes a 5-line banner and then its body
    - Dependency blocks appear in sorted-by-name order
    """

    lines: List[RawLine] = field(default_factory=list)

    def append(self, text: str) -> RawLine:
        """Add a line at the next free position and return it."""
        line = RawLine(index=len(self.lines), text=text)
        self.lines.append(line)
        return line

    def extend(self, texts: List[str]) -> None:
        for text in texts:
            self.append(text)

    def texts(self) -> List[str]:
        return [line.text for line in self.lines]

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[RawLine]:
        return iter(self.lines)


@dataclass(frozen=True)
class LabelEntry:
    """A resolved ``LABEL <name>`` declaration.

    RULES:
    - declaration_index: 0-based position of the LABEL line
    - target_line_number: number the *next* line receives,
      i.e. (declaration_index + 2) * step
    """

    name: str
    declaration_index: int
    target_line_number: int


LabelTable = Dict[str, LabelEntry]
"""Label name → entry. Keys are unique; the last declaration wins."""


@dataclass(frozen=True)
class NumberedLine:
    """One line of the final program.

    Attributes:
        number: BASIC line number (a multiple of the numbering step).
        text: Statement text after label and banner rewriting.
        width: Column width the number is right-justified into.
    """

    number: int
    text: str
    width: int

    def render(self) -> str:
        """Return the line as it appears in the output file (no terminator)."""
        return "{:>{width}} {}".format(self.number, self.text, width=self.width)
