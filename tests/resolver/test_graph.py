"""Tests for catalog dependency graph resolution."""

from __future__ import annotations

import asyncio
from typing import Optional

import pytest

from compscan.config import ResolverConfig
from compscan.errors import AmbiguousDependencyPending
from compscan.models import CatalogRef, DependencyNode, UnknownDependency
from compscan.resolver import GraphResolution, InMemoryCatalog, resolve_graph, resolve_graph_sync


@pytest.mark.asyncio
async def test_cycle_terminates_with_each_node_once(catalog_builder) -> None:
    catalog_builder.add("o/a", ["o/b"])
    catalog_builder.add("o/b", ["o/c"])
    catalog_builder.add("o/c", ["o/a"])

    graph = await resolve_graph(["o/a"], catalog_builder.catalog)

    assert sorted(graph.files) == [
        "/components/ui/a.tsx",
        "/components/ui/b.tsx",
        "/components/ui/c.tsx",
    ]
    assert graph.edges == {"o/a": ["o/b"], "o/b": ["o/c"], "o/c": []}
    assert set(catalog_builder.catalog.fetch_counts.values()) == {1}
    assert graph.ok


@pytest.mark.asyncio
async def test_shared_dependency_is_fetched_once(catalog_builder) -> None:
    catalog_builder.add("o/a", ["o/x"])
    catalog_builder.add("o/b", ["o/x"])
    catalog_builder.add("o/x", deps={"clsx": "latest"})

    graph = await resolve_graph(["o/a", "o/b"], catalog_builder.catalog)

    assert catalog_builder.catalog.fetch_counts["o/x"] == 1
    assert graph.edges["o/a"] == ["o/x"]
    assert graph.edges["o/b"] == ["o/x"]
    assert graph.library_deps == {"clsx": "latest"}


@pytest.mark.asyncio
async def test_self_reference_is_dropped(catalog_builder) -> None:
    catalog_builder.add("o/a", ["o/a"])

    graph = await resolve_graph([CatalogRef("o", "a")], catalog_builder.catalog)

    assert graph.edges == {"o/a": []}
    assert catalog_builder.catalog.fetch_counts["o/a"] == 1


@pytest.mark.asyncio
async def test_missing_entry_is_recorded_without_stopping_siblings(catalog_builder) -> None:
    catalog_builder.add("o/a", ["o/missing", "o/b"])
    catalog_builder.add("o/b")

    graph = await resolve_graph(["o/a"], catalog_builder.catalog)

    assert not graph.ok
    assert [(error.key, error.parent) for error in graph.errors] == [("o/missing", "o/a")]
    assert "/components/ui/b.tsx" in graph.files


@pytest.mark.asyncio
async def test_library_deps_later_entries_win(catalog_builder) -> None:
    catalog_builder.add("o/a", deps={"motion": "10.0.0"})
    catalog_builder.add("o/b", deps={"motion": "11.0.0", "clsx": "latest"})

    graph = await resolve_graph(["o/a", "o/b"], catalog_builder.catalog)

    assert graph.library_deps == {"motion": "11.0.0", "clsx": "latest"}


@pytest.mark.asyncio
async def test_path_collision_keeps_first_entry(catalog_builder) -> None:
    catalog_builder.add("first/button", code="first")
    catalog_builder.add("second/button", code="second")

    graph = await resolve_graph(["first/button", "second/button"], catalog_builder.catalog)

    assert graph.files == {"/components/ui/button.tsx": "first"}
    assert set(graph.nodes) == {"first/button", "second/button"}
    assert graph.paths == {"first/button": "/components/ui/button.tsx"}


@pytest.mark.asyncio
async def test_configured_path_template_is_used(catalog_builder) -> None:
    catalog_builder.add("acme/card", category="marketing")
    config = ResolverConfig(path_template="/registry/{owner}/{slug}.tsx")

    graph = await resolve_graph(["acme/card"], catalog_builder.catalog, config=config)

    assert list(graph.files) == ["/registry/acme/card.tsx"]


@pytest.mark.asyncio
async def test_ambiguous_references_block_resolution(catalog_builder) -> None:
    catalog_builder.add("o/a")
    pending = UnknownDependency("button", "ui", False)

    with pytest.raises(AmbiguousDependencyPending) as excinfo:
        await resolve_graph(["o/a"], catalog_builder.catalog, unresolved=[pending])

    assert excinfo.value.pending == (pending,)
    assert not catalog_builder.catalog.fetch_counts


@pytest.mark.asyncio
async def test_bare_slug_is_treated_as_pending(catalog_builder) -> None:
    with pytest.raises(AmbiguousDependencyPending) as excinfo:
        await resolve_graph(["button"], catalog_builder.catalog)

    assert [dep.slug_with_owner_missing for dep in excinfo.value.pending] == ["button"]


@pytest.mark.asyncio
async def test_lookup_errors_propagate() -> None:
    class _FailingCatalog:
        async def fetch(
            self, owner: str, slug: str, category: Optional[str] = None
        ) -> Optional[DependencyNode]:
            raise ConnectionError("catalog unavailable")

    with pytest.raises(ConnectionError):
        await resolve_graph(["o/a"], _FailingCatalog())


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_fetch() -> None:
    catalog = InMemoryCatalog()
    resolution = GraphResolution(catalog)
    ref = CatalogRef("o", "a")

    first, second = await asyncio.gather(resolution._fetch(ref), resolution._fetch(ref))

    assert first is None and second is None
    assert catalog.fetch_counts["o/a"] == 1


@pytest.mark.asyncio
async def test_nested_demo_references_are_skipped_by_default(catalog_builder) -> None:
    catalog_builder.add("o/hero", ["o/button"], demo_refs=["o/hero-bg"])
    catalog_builder.add("o/button", demo_refs=["o/showcase"])
    catalog_builder.add("o/hero-bg")
    catalog_builder.add("o/showcase")

    graph = await resolve_graph(["o/hero"], catalog_builder.catalog)

    assert set(graph.nodes) == {"o/hero", "o/button", "o/hero-bg"}
    assert graph.edges["o/hero"] == ["o/button", "o/hero-bg"]
    assert graph.edges["o/button"] == []
    assert "o/showcase" not in catalog_builder.catalog.fetch_counts


@pytest.mark.asyncio
async def test_nested_demo_references_are_followed_on_request(catalog_builder) -> None:
    catalog_builder.add("o/hero", ["o/button"], demo_refs=["o/hero-bg"])
    catalog_builder.add("o/button", demo_refs=["o/showcase"])
    catalog_builder.add("o/hero-bg")
    catalog_builder.add("o/showcase")

    graph = await resolve_graph(
        ["o/hero"], catalog_builder.catalog, with_demo_dependencies=True
    )

    assert set(graph.nodes) == {"o/hero", "o/button", "o/hero-bg", "o/showcase"}
    assert graph.edges["o/button"] == ["o/showcase"]


def test_resolve_graph_sync_runs_to_completion(catalog_builder) -> None:
    catalog_builder.add("o/a", ["o/b"], deps={"lucide-react": "latest"})
    catalog_builder.add("o/b")

    graph = resolve_graph_sync(["o/a"], catalog_builder.catalog)

    assert set(graph.nodes) == {"o/a", "o/b"}
    assert graph.library_deps == {"lucide-react": "latest"}
