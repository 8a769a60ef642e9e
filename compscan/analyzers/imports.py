"""Import classification for component and demo modules."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from tree_sitter import Node

from ..config import AnalysisConfig
from ..logging import get_logger
from ..models import ImportEdge, ImportKind, LibraryDependencyMap
from .parser import ParsedSource, string_value

logger = get_logger("imports")

LATEST = "latest"

_DIRECT_REF = re.compile(r"^([\w-]+)/([\w-]+)$")


def classify_imports(
    parsed: ParsedSource, config: Optional[AnalysisConfig] = None
) -> List[ImportEdge]:
    """Classify every import (and ``export ... from``) statement in source order.

    Duplicates are kept; callers merge edges into maps.
    """
    config = config or AnalysisConfig()
    edges: List[ImportEdge] = []
    for node in parsed.statements():
        if node.type not in {"import_statement", "export_statement"}:
            continue
        source_path = import_source(parsed, node)
        if source_path is None:
            if node.type == "import_statement":
                logger.debug("Skipping import without a readable source: %s", parsed.node_text(node))
            continue
        edge = classify_path(source_path, config)
        if edge is None:
            continue
        edge.imported_names = import_bindings(parsed, node)
        edges.append(edge)
    return edges


def classify_path(source_path: str, config: Optional[AnalysisConfig] = None) -> Optional[ImportEdge]:
    """Classify a module specifier, returning None for same-bundle wiring."""
    config = config or AnalysisConfig()
    path = source_path.strip()
    if not path or _is_relative(path):
        return None

    if path.startswith(config.components_root):
        segments = [segment for segment in path[len(config.components_root) :].split("/") if segment]
        if len(segments) < 2:
            return None
        return ImportEdge(
            source_path=source_path,
            imported_names=[],
            kind=ImportKind.CATALOG_AMBIGUOUS,
            slug=segments[-1],
            category=segments[0],
        )

    if path.startswith(config.alias_root):
        return None

    if config.direct_marker and path.startswith(config.direct_marker):
        match = _DIRECT_REF.match(path[len(config.direct_marker) :])
        if match is None:
            logger.debug("Ignoring malformed catalog reference %r", source_path)
            return None
        owner, slug = match.groups()
        return ImportEdge(
            source_path=source_path,
            imported_names=[],
            kind=ImportKind.CATALOG_DIRECT,
            owner=owner,
            slug=slug,
        )

    package = package_name(path, config.package_aliases)
    if not package or _is_runtime_package(package, config):
        return None
    return ImportEdge(
        source_path=source_path,
        imported_names=[],
        kind=ImportKind.LIBRARY,
        package=package,
    )


def package_name(source_path: str, aliases: Optional[Dict[str, str]] = None) -> str:
    """Return the installable package for a bare module specifier."""
    aliases = aliases or {}
    if source_path in aliases:
        return aliases[source_path]
    parts = source_path.split("/")
    if source_path.startswith("@"):
        name = "/".join(parts[:2]) if len(parts) >= 2 and parts[1] else ""
    else:
        name = parts[0]
    return aliases.get(name, name)


def import_source(parsed: ParsedSource, node: Node) -> Optional[str]:
    """Return the module specifier of an import or re-export statement."""
    source_node = node.child_by_field_name("source")
    if source_node is None:
        for child in node.named_children:
            if child.type == "import_require_clause":
                source_node = child.child_by_field_name("source")
                break
    return string_value(parsed, source_node)


def import_bindings(parsed: ParsedSource, node: Node) -> List[str]:
    """Return the local names bound (or re-exported) by a statement."""
    names: List[str] = []
    for child in node.named_children:
        if child.type == "import_clause":
            for part in child.named_children:
                if part.type == "identifier":
                    names.append(parsed.node_text(part))
                elif part.type == "namespace_import":
                    names.extend(
                        parsed.node_text(item) for item in part.named_children if item.type == "identifier"
                    )
                elif part.type == "named_imports":
                    names.extend(_named_import_locals(parsed, part))
        elif child.type == "import_require_clause":
            names.extend(
                parsed.node_text(item) for item in child.named_children[:1] if item.type == "identifier"
            )
        elif child.type == "export_clause":
            for specifier in child.named_children:
                if specifier.type != "export_specifier":
                    continue
                target = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                if target is not None and target.type == "identifier":
                    names.append(parsed.node_text(target))
    return names


def library_dependencies(edges: Iterable[ImportEdge]) -> LibraryDependencyMap:
    """Merge library edges into a package -> version tag map."""
    return {edge.package: LATEST for edge in edges if edge.kind is ImportKind.LIBRARY and edge.package}


def direct_catalog_dependencies(edges: Iterable[ImportEdge]) -> List[str]:
    """Return unique ``owner/slug`` references in order of appearance."""
    refs = (
        f"{edge.owner}/{edge.slug}"
        for edge in edges
        if edge.kind is ImportKind.CATALOG_DIRECT and edge.owner and edge.slug
    )
    return list(dict.fromkeys(refs))


def ambiguous_catalog_dependencies(edges: Iterable[ImportEdge]) -> List[ImportEdge]:
    """Return ambiguous edges, one per distinct source path."""
    unique: Dict[str, ImportEdge] = {}
    for edge in edges:
        if edge.kind is ImportKind.CATALOG_AMBIGUOUS:
            unique.setdefault(edge.source_path, edge)
    return list(unique.values())


def _named_import_locals(parsed: ParsedSource, node: Node) -> Iterable[str]:
    for specifier in node.named_children:
        if specifier.type != "import_specifier":
            continue
        local = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
        if local is not None and local.type == "identifier":
            yield parsed.node_text(local)


def _is_relative(path: str) -> bool:
    return path in {".", ".."} or path.startswith(("./", "../", "/"))


def _is_runtime_package(package: str, config: AnalysisConfig) -> bool:
    if package in config.runtime_packages:
        return True
    return any(package.startswith(prefix) for prefix in config.reserved_prefixes)


__all__ = [
    "LATEST",
    "ambiguous_catalog_dependencies",
    "classify_imports",
    "classify_path",
    "direct_catalog_dependencies",
    "import_bindings",
    "import_source",
    "library_dependencies",
]
