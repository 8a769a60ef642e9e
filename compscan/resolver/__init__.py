"""Catalog lookups and dependency graph resolution."""

from .catalog import (
    CatalogLookup,
    InMemoryCatalog,
    load_catalog,
    parse_catalog_url,
    resolve_unknown_dependency,
)
from .graph import GraphResolution, resolve_graph, resolve_graph_sync

__all__ = [
    "CatalogLookup",
    "GraphResolution",
    "InMemoryCatalog",
    "load_catalog",
    "parse_catalog_url",
    "resolve_graph",
    "resolve_graph_sync",
    "resolve_unknown_dependency",
]
