"""Dependency analysis for a submitted component and its demo."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..config import AnalysisConfig
from ..logging import get_logger
from ..models import ImportEdge, SubmissionAnalysis, UnknownDependency
from .exports import extract_demo_component_names, extract_exported_symbols
from .imports import (
    ambiguous_catalog_dependencies,
    classify_imports,
    direct_catalog_dependencies,
    library_dependencies,
)
from .parser import parse_source

logger = get_logger("dependencies")


def analyze_submission(
    code: str,
    demo_code: str = "",
    *,
    component_slug: str = "",
    known_direct: Sequence[str] = (),
    known_demo_direct: Sequence[str] = (),
    skip_component_ambiguity: bool = False,
    config: Optional[AnalysisConfig] = None,
) -> SubmissionAnalysis:
    """Extract names and dependencies the publish workflow surfaces to the user.

    ``known_direct`` and ``known_demo_direct`` hold references the user already
    resolved; ambiguous imports matching them are not flagged again. When a
    demo is added to an existing component its dependencies were settled at
    publish time, which ``skip_component_ambiguity`` reflects.
    """
    config = config or AnalysisConfig()
    component = parse_source(code)
    component_edges = classify_imports(component, config)

    analysis = SubmissionAnalysis(
        component_names=[symbol.name for symbol in extract_exported_symbols(component)],
        library_deps=library_dependencies(component_edges),
        direct_catalog_deps=direct_catalog_dependencies(component_edges),
    )

    demo_edges: List[ImportEdge] = []
    if demo_code.strip():
        demo = parse_source(demo_code)
        demo_edges = classify_imports(demo, config)
        analysis.demo_component_names = extract_demo_component_names(demo)
        analysis.demo_library_deps = library_dependencies(demo_edges)
        analysis.demo_direct_catalog_deps = direct_catalog_dependencies(demo_edges)

    unknown: List[UnknownDependency] = []
    if not skip_component_ambiguity:
        unknown.extend(_unknown(component_edges, is_demo=False))
    unknown.extend(_unknown(demo_edges, is_demo=True))

    analysis.unknown_dependencies = [
        dep
        for dep in dict.fromkeys(unknown)
        if dep.slug_with_owner_missing != component_slug
        and not _is_known(
            dep.slug_with_owner_missing,
            known_demo_direct if dep.is_demo_dependency else known_direct,
        )
    ]
    if analysis.unknown_dependencies:
        logger.debug(
            "Found %d ambiguous catalog dependencies", len(analysis.unknown_dependencies)
        )
    return analysis


def _unknown(edges: Iterable[ImportEdge], *, is_demo: bool) -> List[UnknownDependency]:
    return [
        UnknownDependency(
            slug_with_owner_missing=edge.slug or "",
            category=edge.category or "",
            is_demo_dependency=is_demo,
        )
        for edge in ambiguous_catalog_dependencies(edges)
    ]


def _is_known(slug: str, known: Sequence[str]) -> bool:
    # Identity is the bare slug; the category is not compared.
    return any(ref == slug or ref.rsplit("/", 1)[-1] == slug for ref in known)


__all__ = ["analyze_submission"]
