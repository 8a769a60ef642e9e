from __future__ import annotations

from typing import Dict, Iterable, Optional

import pytest

from compscan.models import CatalogRef, DependencyNode
from compscan.resolver import InMemoryCatalog


class CatalogBuilder:
    """Utility for assembling in-memory catalogs from ``owner/slug`` keys."""

    def __init__(self) -> None:
        self.catalog = InMemoryCatalog()

    def add(
        self,
        key: str,
        refs: Iterable[str] = (),
        *,
        demo_refs: Iterable[str] = (),
        deps: Optional[Dict[str, str]] = None,
        category: str = "ui",
        code: Optional[str] = None,
    ) -> DependencyNode:
        """Register ``key`` with catalog references to other ``owner/slug`` keys."""
        owner, slug = key.split("/")
        node = DependencyNode(
            owner=owner,
            slug=slug,
            category=category,
            code=code if code is not None else f"export function {slug.title()}() {{}}\n",
            library_deps=dict(deps or {}),
            catalog_refs=[CatalogRef.parse(ref) for ref in refs],
            demo_catalog_refs=[CatalogRef.parse(ref) for ref in demo_refs],
        )
        self.catalog.add(node)
        return node


@pytest.fixture
def catalog_builder() -> CatalogBuilder:
    """Provide an empty catalog builder."""
    return CatalogBuilder()
