"""Core data models shared across compscan components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

LibraryDependencyMap = Dict[str, str]


class ImportKind(str, Enum):
    """Classification assigned to an import statement."""

    LIBRARY = "library"
    CATALOG_DIRECT = "catalog_direct"
    CATALOG_AMBIGUOUS = "catalog_ambiguous"


@dataclass(frozen=True)
class ExportedSymbol:
    """Name exported by a component or demo module."""

    name: str


@dataclass
class ImportEdge:
    """A classified import statement."""

    source_path: str
    imported_names: List[str]
    kind: ImportKind
    package: Optional[str] = None
    owner: Optional[str] = None
    slug: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class CatalogRef:
    """Concrete pointer to a catalog entry."""

    owner: str
    slug: str
    category: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.owner}/{self.slug}"

    @classmethod
    def parse(cls, value: str, category: Optional[str] = None) -> "CatalogRef":
        """Build a reference from an ``owner/slug`` string."""
        owner, sep, slug = value.strip().strip("/").partition("/")
        if not sep or not owner or not slug or "/" in slug:
            raise ValueError(f"Expected an 'owner/slug' reference, got {value!r}")
        return cls(owner=owner, slug=slug, category=category)


@dataclass(frozen=True)
class DependencyNode:
    """Catalog entry fetched during graph resolution."""

    owner: str
    slug: str
    category: str
    code: str
    library_deps: LibraryDependencyMap = field(default_factory=dict)
    catalog_refs: List[CatalogRef] = field(default_factory=list)
    # References needed only by the entry's demo.
    demo_catalog_refs: List[CatalogRef] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.owner}/{self.slug}"


@dataclass
class BrokenDependency:
    """A catalog reference that could not be resolved."""

    owner: str
    slug: str
    parent: Optional[str]
    reason: str

    @property
    def key(self) -> str:
        return f"{self.owner}/{self.slug}"


@dataclass
class DependencyGraph:
    """Flat, deduplicated output of graph resolution."""

    files: Dict[str, str] = field(default_factory=dict)
    library_deps: LibraryDependencyMap = field(default_factory=dict)
    nodes: Dict[str, DependencyNode] = field(default_factory=dict)
    edges: Dict[str, List[str]] = field(default_factory=dict)
    paths: Dict[str, str] = field(default_factory=dict)
    errors: List[BrokenDependency] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class UnknownDependency:
    """Ambiguous catalog import awaiting an owner from a human."""

    slug_with_owner_missing: str
    category: str
    is_demo_dependency: bool


@dataclass
class StripResult:
    """Demo text with self imports removed."""

    modified_text: str
    removed_statements: List[str] = field(default_factory=list)


@dataclass
class SubmissionAnalysis:
    """Everything the publish workflow needs from a component/demo pair."""

    component_names: List[str] = field(default_factory=list)
    demo_component_names: List[str] = field(default_factory=list)
    library_deps: LibraryDependencyMap = field(default_factory=dict)
    demo_library_deps: LibraryDependencyMap = field(default_factory=dict)
    direct_catalog_deps: List[str] = field(default_factory=list)
    demo_direct_catalog_deps: List[str] = field(default_factory=list)
    unknown_dependencies: List[UnknownDependency] = field(default_factory=list)


@dataclass
class PreviewManifest:
    """File and dependency manifest handed to the preview sandbox."""

    files: Dict[str, str]
    dependencies: LibraryDependencyMap
    entry: str = "/App.tsx"
