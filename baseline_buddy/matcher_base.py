"""
Base matcher class for feature detection over a parse tree.
"""

from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from .catalog import get_feature
from .issue import Occurrence, default_severity
from .parsers import ParsedSource, walk_tree
from .suppression import SuppressionSet, resolve_suppressions


class BaseMatcher:
    """Base class for all matchers.

    Subclasses register one handler per node kind in ``handlers``. The tree
    is walked once; every node is dispatched to at most one handler.
    """

    kind: str = ""

    def __init__(self):
        self.occurrences: List[Occurrence] = []
        self.parsed: Optional[ParsedSource] = None
        self.suppressions: SuppressionSet = SuppressionSet()
        self.handlers: Dict[str, Callable[[Node], None]] = {}

    def match(self, parsed: Optional[ParsedSource], content: str) -> List[Occurrence]:
        """Run all rules on a parsed unit. A failed parse (None) matches nothing."""
        self.occurrences = []
        if parsed is None:
            return self.occurrences
        self.parsed = parsed
        self.suppressions = resolve_suppressions(content, self.kind)
        try:
            for node in walk_tree(parsed.root):
                handler = self.handlers.get(node.type)
                if handler is not None:
                    handler(node)
        finally:
            self.parsed = None
            self.suppressions = SuppressionSet()
        return self.occurrences

    def _text(self, node: Node) -> str:
        return self.parsed.text(node)

    def _is_suppressed(self, line: int) -> bool:
        """Own-line markers already cover the line below them."""
        return self.suppressions.covers(line)

    def _add_occurrence(self, node: Node, feature_id: str, message: str):
        """Add an occurrence at ``node`` unless its line is suppressed."""
        line, column = self.parsed.position(node)
        if self._is_suppressed(line):
            return
        descriptor = get_feature(feature_id)
        self.occurrences.append(
            Occurrence(
                feature=feature_id,
                file=self.parsed.filename,
                line=line,
                column=column,
                message=message,
                severity=default_severity(descriptor.status if descriptor else None),
                status=descriptor.status if descriptor else None,
                engines=tuple(descriptor.engines) if descriptor else (),
            )
        )
