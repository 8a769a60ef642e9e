"""Static analysis and dependency resolution for published UI components."""

from .analyzers import (
    analyze_submission,
    classify_imports,
    extract_demo_entry_name,
    extract_exported_symbols,
    parse_source,
    strip_self_imports,
)
from .errors import AmbiguousDependencyPending, ParseFailure, ResolutionNotFound
from .resolver import resolve_graph, resolve_graph_sync

__version__ = "0.1.0"

__all__ = [
    "AmbiguousDependencyPending",
    "ParseFailure",
    "ResolutionNotFound",
    "analyze_submission",
    "classify_imports",
    "extract_demo_entry_name",
    "extract_exported_symbols",
    "parse_source",
    "resolve_graph",
    "resolve_graph_sync",
    "strip_self_imports",
]
