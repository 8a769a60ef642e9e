"""Tree-sitter powered source parser for component and demo modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseFailure
from ..logging import get_logger

logger = get_logger("parser")

_CONTROL_ALLOWED = {"\t", "\n", "\r", "\f", "\v"}
_MAX_CONTROL_RATIO = 0.3

_LANGUAGE: Optional[Language] = None


@dataclass
class ParsedSource:
    """A syntax tree together with the bytes it was parsed from."""

    tree: Tree
    source: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def text(self) -> str:
        return self.source.decode("utf-8")

    def node_text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    def statements(self) -> Iterator[Node]:
        """Yield top-level statements, descending into error-recovered regions."""
        yield from _iter_statements(self.root)


def parse_source(text: Union[str, bytes]) -> ParsedSource:
    """Parse component or demo text with the TSX grammar.

    tree-sitter recovers from syntax errors on its own, so a tree is returned
    for almost any input. ``ParseFailure`` is reserved for input that is not
    source text at all, or where recovery produced nothing but an error node.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseFailure(f"Source is not valid UTF-8: {exc}") from exc
    if not isinstance(text, str):
        raise ParseFailure(f"Expected source text, got {type(text).__name__}")
    if _looks_binary(text):
        raise ParseFailure("Source looks like binary data")

    try:
        source = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ParseFailure(f"Source is not encodable as UTF-8: {exc}") from exc
    parser = Parser(_get_language())
    tree = parser.parse(source)
    root = tree.root_node
    if root.type == "ERROR":
        raise ParseFailure("Source could not be recovered into a module")
    if root.has_error:
        logger.debug("Recovered from syntax errors in %d byte source", len(source))
    return ParsedSource(tree=tree, source=source)


def string_value(parsed: ParsedSource, node: Optional[Node]) -> Optional[str]:
    """Return the contents of a string literal node without its quotes."""
    if node is None or node.type != "string":
        return None
    raw = parsed.node_text(node)
    if len(raw) >= 2 and raw[0] in {'"', "'"} and raw[-1] == raw[0]:
        return raw[1:-1]
    return None


def has_token(node: Node, token: str) -> bool:
    """Return True when ``node`` has an anonymous child token such as ``default``."""
    return any(not child.is_named and child.type == token for child in node.children)


def _get_language() -> Language:
    global _LANGUAGE
    if _LANGUAGE is None:
        _LANGUAGE = Language(tree_sitter_typescript.language_tsx())
    return _LANGUAGE


def _iter_statements(node: Node) -> Iterator[Node]:
    for child in node.children:
        yield child
        if child.type == "ERROR":
            yield from _iter_statements(child)


def _looks_binary(text: str) -> bool:
    if "\x00" in text:
        return True
    if not text:
        return False
    control = sum(1 for char in text if char < " " and char not in _CONTROL_ALLOWED)
    return control / len(text) > _MAX_CONTROL_RATIO


__all__ = ["ParsedSource", "has_token", "parse_source", "string_value"]
