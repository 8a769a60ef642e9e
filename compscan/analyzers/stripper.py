"""Removal of self-referential imports from demo text."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..logging import get_logger
from ..models import StripResult
from .imports import import_bindings
from .parser import parse_source

logger = get_logger("stripper")


def strip_self_imports(demo_text: str, self_symbol_names: Iterable[str]) -> StripResult:
    """Delete import statements that bring the published component into its demo.

    A statement is dropped when any name it binds equals one of
    ``self_symbol_names`` or starts with one (``ButtonDemo1`` for ``Button``).
    Each removed span includes one trailing line terminator. Removed
    fragments are returned in source order.
    """
    names = [name for name in dict.fromkeys(self_symbol_names) if name]
    if not names:
        return StripResult(modified_text=demo_text)

    parsed = parse_source(demo_text)
    source = parsed.source
    spans: List[Tuple[int, int]] = []
    for node in parsed.statements():
        if node.type != "import_statement":
            continue
        bound = import_bindings(parsed, node)
        if not any(_matches(name, names) for name in bound):
            continue
        start, end = node.start_byte, node.end_byte
        if source[end : end + 2] == b"\r\n":
            end += 2
        elif source[end : end + 1] == b"\n":
            end += 1
        spans.append((start, end))

    if not spans:
        return StripResult(modified_text=demo_text)

    spans.sort()
    removed = [source[start:end].decode("utf-8") for start, end in spans]
    modified = source
    for start, end in reversed(spans):
        modified = modified[:start] + modified[end:]
    logger.debug("Removed %d self import(s) from demo text", len(spans))
    return StripResult(modified_text=modified.decode("utf-8"), removed_statements=removed)


def _matches(bound_name: str, self_names: List[str]) -> bool:
    return any(bound_name == name or bound_name.startswith(name) for name in self_names)


__all__ = ["strip_self_imports"]
