"""Catalog lookup adapters and catalog URL handling."""

from __future__ import annotations

import asyncio
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol
from urllib.parse import urlparse

import yaml

from ..errors import CatalogError, InvalidCatalogUrl
from ..logging import get_logger
from ..models import CatalogRef, DependencyNode, UnknownDependency

logger = get_logger("catalog")


class CatalogLookup(Protocol):
    """Source of published catalog entries."""

    async def fetch(
        self, owner: str, slug: str, category: Optional[str] = None
    ) -> Optional[DependencyNode]:
        """Return the entry for ``owner/slug`` or None when it does not exist."""


class InMemoryCatalog:
    """Dictionary-backed catalog that counts fetches per key."""

    def __init__(self, nodes: Iterable[DependencyNode] = ()) -> None:
        self._nodes: Dict[str, DependencyNode] = {}
        self.fetch_counts: Counter[str] = Counter()
        for node in nodes:
            self.add(node)

    def add(self, node: DependencyNode) -> None:
        self._nodes[node.key] = node

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    async def fetch(
        self, owner: str, slug: str, category: Optional[str] = None
    ) -> Optional[DependencyNode]:
        key = f"{owner}/{slug}"
        self.fetch_counts[key] += 1
        # Yield so sibling fetches interleave like real I/O.
        await asyncio.sleep(0)
        return self._nodes.get(key)


def load_catalog(path: Path, *, default_category: str = "ui") -> InMemoryCatalog:
    """Load a YAML catalog file into an in-memory lookup.

    The file holds an ``entries`` list; each entry names ``owner``, ``slug``,
    ``category``, either inline ``code`` or a ``code_path`` relative to the
    file, ``dependencies`` (mapping or list), ``registry_dependencies`` and
    ``registry_demo_dependencies`` (``owner/slug`` strings).
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("entries", []), list):
        raise CatalogError(f"{path.name} must contain an 'entries' list")

    catalog = InMemoryCatalog()
    for index, raw in enumerate(data.get("entries", [])):
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog entry #{index} must be a mapping")
        catalog.add(_node_from_entry(raw, path.parent, default_category, index))
    logger.debug("Loaded %d catalog entries from %s", len(catalog), path)
    return catalog


def parse_catalog_url(url: str, host: str, *, category: Optional[str] = None) -> CatalogRef:
    """Turn ``https://<host>/<owner>/<slug>`` into a catalog reference."""
    value = url.strip()
    if "://" not in value:
        value = f"https://{value}"
    parsed = urlparse(value)
    netloc = parsed.netloc.lower()
    expected = host.lower()
    if netloc not in {expected, f"www.{expected}"}:
        raise InvalidCatalogUrl(f"Please enter a valid {host} URL")
    segments = [segment for segment in parsed.path.split("/") if segment]
    if len(segments) < 2:
        raise InvalidCatalogUrl(f"Couldn't resolve the owner and slug from {url!r}")
    return CatalogRef(owner=segments[0], slug=segments[1], category=category)


def resolve_unknown_dependency(unknown: UnknownDependency, url: str, host: str) -> CatalogRef:
    """Promote an ambiguous dependency to a direct one using a pasted URL."""
    return parse_catalog_url(url, host, category=unknown.category or None)


def _node_from_entry(
    raw: Dict[str, Any], base: Path, default_category: str, index: int
) -> DependencyNode:
    owner = raw.get("owner")
    slug = raw.get("slug")
    if not isinstance(owner, str) or not isinstance(slug, str) or not owner or not slug:
        raise CatalogError(f"Catalog entry #{index} needs string 'owner' and 'slug'")

    code = raw.get("code")
    code_path = raw.get("code_path")
    if code is None and isinstance(code_path, str):
        try:
            code = (base / code_path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"Cannot read code for {owner}/{slug}: {exc}") from exc
    if not isinstance(code, str):
        raise CatalogError(f"Catalog entry {owner}/{slug} has no code")

    category = raw.get("category")
    return DependencyNode(
        owner=owner,
        slug=slug,
        category=str(category) if category else default_category,
        code=code,
        library_deps=_library_map(raw.get("dependencies")),
        catalog_refs=_catalog_refs(raw, "registry_dependencies", f"{owner}/{slug}"),
        demo_catalog_refs=_catalog_refs(raw, "registry_demo_dependencies", f"{owner}/{slug}"),
    )


def _catalog_refs(raw: Dict[str, Any], field: str, key: str) -> List[CatalogRef]:
    refs: List[CatalogRef] = []
    for value in raw.get(field) or []:
        try:
            refs.append(CatalogRef.parse(str(value)))
        except ValueError as exc:
            raise CatalogError(f"Catalog entry {key}: {exc}") from exc
    return refs


def _library_map(value: Any) -> Dict[str, str]:
    if isinstance(value, dict):
        return {str(name): str(tag) if tag is not None else "latest" for name, tag in value.items()}
    if isinstance(value, list):
        return {str(name): "latest" for name in value}
    return {}


__all__ = [
    "CatalogLookup",
    "InMemoryCatalog",
    "load_catalog",
    "parse_catalog_url",
    "resolve_unknown_dependency",
]
