"""Exported symbol extraction for component and demo modules."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional

from tree_sitter import Node

from ..models import ExportedSymbol
from .parser import ParsedSource, has_token, string_value

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_BARE_EXPORT = re.compile(r"\bexport\s+([A-Za-z_$][\w$]*)\s*(?:;|$)", re.MULTILINE)
_RESERVED = {
    "abstract",
    "as",
    "async",
    "class",
    "const",
    "declare",
    "default",
    "enum",
    "function",
    "import",
    "interface",
    "let",
    "module",
    "namespace",
    "type",
    "var",
}

_NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "class_declaration",
    "abstract_class_declaration",
}
_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_TYPE_DECLARATIONS = {"interface_declaration", "type_alias_declaration"}
_NAMED_EXPRESSIONS = {"function", "function_expression", "generator_function", "class"}


def extract_exported_symbols(parsed: ParsedSource) -> List[ExportedSymbol]:
    """Return exported value names in order of first appearance."""
    names: List[str] = []
    for node in parsed.statements():
        if node.type == "export_statement":
            if node.has_error:
                names.extend(_bare_export_names(parsed, node))
            names.extend(_export_statement_names(parsed, node))
        elif node.type == "ERROR":
            names.extend(_bare_export_names(parsed, node))
    return [ExportedSymbol(name=name) for name in _unique(names)]


def extract_demo_entry_name(parsed: ParsedSource) -> Optional[str]:
    """Return the first capitalised, exported, non-default function name."""
    for node in parsed.statements():
        if node.type != "export_statement" or has_token(node, "default"):
            continue
        declaration = node.child_by_field_name("declaration")
        if declaration is None or declaration.type != "function_declaration":
            continue
        name = parsed.node_text(declaration.child_by_field_name("name"))
        if name[:1].isupper():
            return name
    return None


def extract_demo_component_names(parsed: ParsedSource) -> List[str]:
    """Return the demo variants a preview should offer.

    Named function and variable exports count, as do brace exports and the
    legacy ``export default { DemoA, DemoB }`` object form. A plain default
    export is the preview's fallback and is not listed.
    """
    names: List[str] = []
    for node in parsed.statements():
        if node.type != "export_statement" or _is_type_only(node):
            continue
        if has_token(node, "default"):
            value = node.child_by_field_name("value")
            if value is not None and value.type == "object":
                names.extend(_object_keys(parsed, value))
            continue
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            names.extend(_declaration_names(parsed, declaration))
            continue
        for specifier in _export_specifiers(node):
            local, exported = _specifier_names(parsed, specifier)
            if exported and exported != "default":
                names.append(exported)
    return [name for name in _unique(names) if _IDENTIFIER.match(name)]


def extract_exported_types(parsed: ParsedSource) -> List[str]:
    """Return exported ``type`` and ``interface`` names."""
    names: List[str] = []
    for node in parsed.statements():
        if node.type != "export_statement":
            continue
        declaration = node.child_by_field_name("declaration")
        if declaration is not None and declaration.type in _TYPE_DECLARATIONS:
            names.append(parsed.node_text(declaration.child_by_field_name("name")))
            continue
        statement_is_type = _is_type_only(node)
        for specifier in _export_specifiers(node):
            if statement_is_type or has_token(specifier, "type"):
                _, exported = _specifier_names(parsed, specifier)
                names.append(exported)
    return [name for name in _unique(names) if _IDENTIFIER.match(name)]


def _export_statement_names(parsed: ParsedSource, node: Node) -> Iterator[str]:
    if _is_type_only(node):
        return
    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        yield from _declaration_names(parsed, declaration)
        return

    if has_token(node, "default"):
        value = node.child_by_field_name("value")
        if value is None:
            return
        if value.type == "identifier":
            yield parsed.node_text(value)
        elif value.type in _NAMED_EXPRESSIONS:
            name_node = value.child_by_field_name("name")
            if name_node is not None:
                yield parsed.node_text(name_node)
        return

    for specifier in _export_specifiers(node):
        if has_token(specifier, "type"):
            continue
        local, exported = _specifier_names(parsed, specifier)
        if exported == "default" and local == "default":
            # `export { default } from "..."` re-exports an anonymous default.
            continue
        name = local if exported == "default" else exported
        if name and _IDENTIFIER.match(name):
            yield name

    for child in node.named_children:
        if child.type == "namespace_export":
            for part in child.named_children:
                if part.type == "identifier":
                    yield parsed.node_text(part)


def _declaration_names(parsed: ParsedSource, declaration: Node) -> Iterator[str]:
    if declaration.type in _NAMED_DECLARATIONS:
        name_node = declaration.child_by_field_name("name")
        if name_node is not None:
            yield parsed.node_text(name_node)
    elif declaration.type in _VARIABLE_DECLARATIONS:
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is not None:
                yield from _pattern_names(parsed, name_node)


def _pattern_names(parsed: ParsedSource, node: Node) -> Iterator[str]:
    if node.type in {"identifier", "shorthand_property_identifier_pattern"}:
        yield parsed.node_text(node)
        return
    if node.type in {"assignment_pattern", "object_assignment_pattern"}:
        left = node.child_by_field_name("left")
        if left is not None:
            yield from _pattern_names(parsed, left)
        return
    if node.type == "pair_pattern":
        value = node.child_by_field_name("value")
        if value is not None:
            yield from _pattern_names(parsed, value)
        return
    if node.type in {"object_pattern", "array_pattern", "rest_pattern"}:
        for child in node.named_children:
            yield from _pattern_names(parsed, child)


def _bare_export_names(parsed: ParsedSource, node: Node) -> Iterator[str]:
    """Recognise ``export Name;``, which only survives as an error region."""
    end = node.end_byte
    sibling = node.next_sibling
    if sibling is not None and parsed.node_text(node).strip() == "export":
        end = sibling.end_byte
    text = parsed.source[node.start_byte : end].decode("utf-8", errors="ignore")
    for match in _BARE_EXPORT.finditer(text):
        name = match.group(1)
        if name not in _RESERVED:
            yield name


def _export_specifiers(node: Node) -> Iterator[Node]:
    for child in node.named_children:
        if child.type != "export_clause":
            continue
        for specifier in child.named_children:
            if specifier.type == "export_specifier":
                yield specifier


def _specifier_names(parsed: ParsedSource, specifier: Node) -> tuple[str, str]:
    local = _module_export_name(parsed, specifier.child_by_field_name("name"))
    alias_node = specifier.child_by_field_name("alias")
    exported = _module_export_name(parsed, alias_node) if alias_node is not None else local
    return local, exported


def _module_export_name(parsed: ParsedSource, node: Optional[Node]) -> str:
    if node is None:
        return ""
    if node.type == "string":
        return string_value(parsed, node) or ""
    return parsed.node_text(node)


def _object_keys(parsed: ParsedSource, node: Node) -> Iterator[str]:
    for child in node.named_children:
        if child.type == "shorthand_property_identifier":
            yield parsed.node_text(child)
        elif child.type == "pair":
            key = child.child_by_field_name("key")
            if key is not None and key.type == "property_identifier":
                yield parsed.node_text(key)


def _is_type_only(node: Node) -> bool:
    return has_token(node, "type")


def _unique(names: Iterable[str]) -> List[str]:
    return [name for name in dict.fromkeys(names) if name]


__all__ = [
    "extract_demo_component_names",
    "extract_demo_entry_name",
    "extract_exported_symbols",
    "extract_exported_types",
]
