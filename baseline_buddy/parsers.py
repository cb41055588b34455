"""
Structural parsing for scripts and stylesheets via tree-sitter.

Parsers fail soft: a unit that cannot be parsed yields None and a logged
warning, never an exception.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import tree_sitter_css
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TSX = "tsx"

_SCRIPT_LANGUAGES = {
    JAVASCRIPT: Language(tree_sitter_javascript.language()),
    TYPESCRIPT: Language(tree_sitter_typescript.language_typescript()),
    TSX: Language(tree_sitter_typescript.language_tsx()),
}
_CSS_LANGUAGE = Language(tree_sitter_css.language())


@dataclass
class ParsedSource:
    """A parse tree plus the bytes it was built from."""
    filename: str
    kind: str
    source: bytes
    tree: Tree

    def __post_init__(self):
        self._lines: List[bytes] = self.source.split(b"\n")

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        """Source text of a node (tree-sitter works in byte offsets)."""
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start_byte: int, end_byte: int) -> str:
        return self.source[start_byte:end_byte].decode("utf-8", errors="replace")

    def position(self, node: Node) -> Tuple[int, int]:
        """(1-based line, 0-based character column) of a node's start."""
        row, byte_col = node.start_point[0], node.start_point[1]
        line = self._lines[row] if row < len(self._lines) else b""
        column = len(line[:byte_col].decode("utf-8", errors="replace"))
        return row + 1, column


def walk_tree(node: Node) -> Iterator[Node]:
    """Pre-order traversal visiting every node once."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def script_dialect(filename: str, language_id: Optional[str] = None) -> str:
    """Pick the script grammar from a language id or file extension."""
    lang = (language_id or "").lower()
    if lang == "typescriptreact":
        return TSX
    if lang == "typescript":
        return TYPESCRIPT
    lower = filename.lower()
    if lower.endswith(".tsx"):
        return TSX
    if lower.endswith((".ts", ".mts", ".cts")):
        return TYPESCRIPT
    return JAVASCRIPT


def _parse(language: Language, content: str) -> Tuple[bytes, Tree]:
    source = content.encode("utf-8")
    parser = Parser(language)
    return source, parser.parse(source)


def parse_script(content: str, filename: str, dialect: str = JAVASCRIPT) -> Optional[ParsedSource]:
    """Parse script source. Any syntax error fails the whole unit."""
    try:
        source, tree = _parse(_SCRIPT_LANGUAGES[dialect], content)
    except Exception as e:
        logger.warning("Failed to parse script %s: %s", filename, e)
        return None
    if tree.root_node.has_error:
        logger.warning("Failed to parse script %s: syntax error", filename)
        return None
    return ParsedSource(filename, "script", source, tree)


def parse_stylesheet(content: str, filename: str) -> Optional[ParsedSource]:
    """Parse stylesheet source. Recoverable errors keep the partial tree."""
    try:
        source, tree = _parse(_CSS_LANGUAGE, content)
    except Exception as e:
        logger.warning("Failed to parse stylesheet %s: %s", filename, e)
        return None
    if tree.root_node.has_error:
        logger.debug("Stylesheet %s parsed with recoverable errors", filename)
    return ParsedSource(filename, "stylesheet", source, tree)
