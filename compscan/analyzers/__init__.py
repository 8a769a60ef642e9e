"""Static analysis of component and demo source text."""

from .dependencies import analyze_submission
from .exports import (
    extract_demo_component_names,
    extract_demo_entry_name,
    extract_exported_symbols,
    extract_exported_types,
)
from .imports import (
    ambiguous_catalog_dependencies,
    classify_imports,
    classify_path,
    direct_catalog_dependencies,
    library_dependencies,
)
from .parser import ParsedSource, parse_source
from .stripper import strip_self_imports

__all__ = [
    "ParsedSource",
    "ambiguous_catalog_dependencies",
    "analyze_submission",
    "classify_imports",
    "classify_path",
    "direct_catalog_dependencies",
    "extract_demo_component_names",
    "extract_demo_entry_name",
    "extract_exported_symbols",
    "extract_exported_types",
    "library_dependencies",
    "parse_source",
    "strip_self_imports",
]
