"""Breadth-first resolution of catalog dependency graphs."""

from __future__ import annotations

import asyncio
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ..config import ResolverConfig
from ..errors import AmbiguousDependencyPending, ResolutionNotFound
from ..logging import get_logger
from ..models import (
    BrokenDependency,
    CatalogRef,
    DependencyGraph,
    DependencyNode,
    UnknownDependency,
)
from .catalog import CatalogLookup

logger = get_logger("resolver")

DirectReference = Union[str, CatalogRef, UnknownDependency]

# (reference, keys on the path from a root to the reference's parent, parent key)
_FrontierItem = Tuple[CatalogRef, Tuple[str, ...], Optional[str]]


class GraphResolution:
    """State for one resolution call: visited keys, in-flight fetches and output."""

    def __init__(
        self,
        lookup: CatalogLookup,
        config: Optional[ResolverConfig] = None,
        *,
        with_demo_dependencies: bool = False,
    ) -> None:
        self._lookup = lookup
        self._config = config or ResolverConfig()
        self._with_demo = with_demo_dependencies
        self._inflight: Dict[str, "asyncio.Future[Optional[DependencyNode]]"] = {}
        self._visited: Set[str] = set()
        self._path_keys: Dict[str, str] = {}
        self.graph = DependencyGraph()

    async def run(self, roots: Sequence[CatalogRef]) -> DependencyGraph:
        frontier: List[_FrontierItem] = []
        for ref in roots:
            if ref.key in self._visited:
                continue
            self._visited.add(ref.key)
            frontier.append((ref, (), None))

        depth = 0
        while frontier:
            logger.debug("Resolving %d catalog entries at depth %d", len(frontier), depth)
            results = await asyncio.gather(
                *(self._fetch(ref) for ref, _, _ in frontier), return_exceptions=True
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result

            next_frontier: List[_FrontierItem] = []
            for (ref, ancestors, parent), node in zip(frontier, results):
                if node is None:
                    self._record_missing(ref, parent)
                    continue
                next_frontier.extend(self._visit(ref, node, ancestors + (ref.key,)))
            frontier = next_frontier
            depth += 1
        return self.graph

    def _fetch(self, ref: CatalogRef) -> "asyncio.Future[Optional[DependencyNode]]":
        future = self._inflight.get(ref.key)
        if future is None:
            future = asyncio.ensure_future(self._lookup.fetch(ref.owner, ref.slug, ref.category))
            self._inflight[ref.key] = future
        return future

    def _visit(
        self, ref: CatalogRef, node: DependencyNode, path: Tuple[str, ...]
    ) -> Iterable[_FrontierItem]:
        self._add_node(ref, node)
        children = self.graph.edges.setdefault(ref.key, [])
        for child in self._child_refs(node, depth=len(path) - 1):
            if child.key in path:
                logger.debug("Dropping cyclic reference %s -> %s", ref.key, child.key)
                continue
            if child.key not in children:
                children.append(child.key)
            if child.key in self._visited:
                continue
            self._visited.add(child.key)
            yield (child, path, ref.key)

    def _child_refs(self, node: DependencyNode, *, depth: int) -> List[CatalogRef]:
        # Demo-only references of a root are always followed; deeper ones only on request.
        if self._with_demo or depth == 0:
            return [*node.catalog_refs, *node.demo_catalog_refs]
        return list(node.catalog_refs)

    def _add_node(self, ref: CatalogRef, node: DependencyNode) -> None:
        category = node.category or ref.category or self._config.default_category
        path = self._config.path_template.format(owner=ref.owner, slug=ref.slug, category=category)
        graph = self.graph
        graph.nodes[ref.key] = node
        graph.library_deps.update(node.library_deps)

        existing = self._path_keys.get(path)
        if existing is not None and existing != ref.key:
            logger.warning(
                "Catalog entries %s and %s both map to %s; keeping %s", existing, ref.key, path, existing
            )
            return
        self._path_keys[path] = ref.key
        graph.paths[ref.key] = path
        graph.files[path] = node.code

    def _record_missing(self, ref: CatalogRef, parent: Optional[str]) -> None:
        reason = str(ResolutionNotFound(ref.owner, ref.slug))
        logger.warning("%s (referenced by %s)", reason, parent or "the submission")
        self.graph.errors.append(
            BrokenDependency(owner=ref.owner, slug=ref.slug, parent=parent, reason=reason)
        )


async def resolve_graph(
    direct: Iterable[DirectReference],
    lookup: CatalogLookup,
    *,
    unresolved: Sequence[UnknownDependency] = (),
    config: Optional[ResolverConfig] = None,
    with_demo_dependencies: bool = False,
) -> DependencyGraph:
    """Resolve direct catalog references into a flat file set and library map.

    Raises ``AmbiguousDependencyPending`` before any lookup when an ambiguous
    reference is still outstanding. Missing entries are recorded in
    ``DependencyGraph.errors`` and do not stop independent branches.

    Demo-only references of the roots are always followed. Those of deeper
    entries are followed only when ``with_demo_dependencies`` is set, so an
    install does not pull in what nested components need for their demos.
    """
    roots = _concrete_roots(direct, unresolved)
    resolution = GraphResolution(lookup, config, with_demo_dependencies=with_demo_dependencies)
    return await resolution.run(roots)


def resolve_graph_sync(
    direct: Iterable[DirectReference],
    lookup: CatalogLookup,
    *,
    unresolved: Sequence[UnknownDependency] = (),
    config: Optional[ResolverConfig] = None,
    with_demo_dependencies: bool = False,
) -> DependencyGraph:
    """Run :func:`resolve_graph` to completion for synchronous callers."""
    return asyncio.run(
        resolve_graph(
            direct,
            lookup,
            unresolved=unresolved,
            config=config,
            with_demo_dependencies=with_demo_dependencies,
        )
    )


def _concrete_roots(
    direct: Iterable[DirectReference], unresolved: Sequence[UnknownDependency]
) -> List[CatalogRef]:
    pending: List[UnknownDependency] = list(unresolved)
    roots: List[CatalogRef] = []
    for item in direct:
        if isinstance(item, CatalogRef):
            roots.append(item)
        elif isinstance(item, UnknownDependency):
            pending.append(item)
        else:
            try:
                roots.append(CatalogRef.parse(item))
            except ValueError:
                pending.append(
                    UnknownDependency(
                        slug_with_owner_missing=item.strip("/").rsplit("/", 1)[-1],
                        category="",
                        is_demo_dependency=False,
                    )
                )
    if pending:
        raise AmbiguousDependencyPending(pending)
    return roots


__all__ = ["DirectReference", "GraphResolution", "resolve_graph", "resolve_graph_sync"]
