"""
Inline suppression markers.

A marker comment at the end of a line suppresses that line. A marker
comment alone on its line suppresses it and the line below.
"""

from dataclasses import dataclass
from typing import FrozenSet

MARKER = "baseline-buddy-ignore"

SCRIPT = "script"
STYLESHEET = "stylesheet"

MARKER_COMMENTS = {
    SCRIPT: (f"// {MARKER}", f"/* {MARKER} */"),
    STYLESHEET: (f"/* {MARKER} */",),
}


@dataclass(frozen=True)
class SuppressionSet:
    """1-based line numbers exempt from detection in one source text."""
    lines: FrozenSet[int] = frozenset()

    def covers(self, line: int) -> bool:
        return line in self.lines

    def __len__(self) -> int:
        return len(self.lines)


def resolve_suppressions(text: str, kind: str) -> SuppressionSet:
    """Scan raw text for suppression markers in the comment syntax of `kind`."""
    markers = MARKER_COMMENTS.get(kind, ())
    lines = text.split("\n")
    suppressed = set()
    for index, line in enumerate(lines):
        line_number = index + 1
        for marker in markers:
            if marker not in line:
                continue
            suppressed.add(line_number)
            if line.strip() == marker and index + 1 < len(lines):
                suppressed.add(line_number + 1)
    return SuppressionSet(frozenset(suppressed))
