"""FastAPI application entrypoint for compscan service mode."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..analyzers import (
    analyze_submission,
    classify_imports,
    extract_demo_entry_name,
    extract_exported_symbols,
    parse_source,
    strip_self_imports,
)
from ..config import CompscanConfig, default_config
from ..errors import AmbiguousDependencyPending, ParseFailure
from ..logging import get_logger
from ..models import UnknownDependency
from ..preview import build_registry_item
from ..resolver import CatalogLookup, InMemoryCatalog, load_catalog, resolve_graph

logger = get_logger("service")


class SourceRequest(BaseModel):
    code: str


class ExportsResponse(BaseModel):
    exports: List[str]
    demo_entry: Optional[str] = None


class ImportEdgeModel(BaseModel):
    source_path: str
    imported_names: List[str]
    kind: str
    package: Optional[str] = None
    owner: Optional[str] = None
    slug: Optional[str] = None
    category: Optional[str] = None


class ImportsResponse(BaseModel):
    imports: List[ImportEdgeModel]


class StripRequest(BaseModel):
    demo_code: str
    self_names: List[str]


class StripResponse(BaseModel):
    modified_text: str
    removed_statements: List[str]


class UnknownDependencyModel(BaseModel):
    slug_with_owner_missing: str
    category: str
    is_demo_dependency: bool


class AnalyzeRequest(BaseModel):
    code: str
    demo_code: str = ""
    component_slug: str = ""
    known_direct: List[str] = Field(default_factory=list)
    known_demo_direct: List[str] = Field(default_factory=list)
    skip_component_ambiguity: bool = False


class AnalyzeResponse(BaseModel):
    component_names: List[str]
    demo_component_names: List[str]
    library_deps: Dict[str, str]
    demo_library_deps: Dict[str, str]
    direct_catalog_deps: List[str]
    demo_direct_catalog_deps: List[str]
    unknown_dependencies: List[UnknownDependencyModel]


class ResolveRequest(BaseModel):
    refs: List[str]
    unresolved: List[UnknownDependencyModel] = Field(default_factory=list)
    with_demo_dependencies: bool = False


class BrokenDependencyModel(BaseModel):
    owner: str
    slug: str
    parent: Optional[str] = None
    reason: str


class ResolveResponse(BaseModel):
    files: Dict[str, str]
    library_deps: Dict[str, str]
    edges: Dict[str, List[str]]
    errors: List[BrokenDependencyModel]


class RegistryItemRequest(BaseModel):
    owner: str
    slug: str
    category: str = "ui"
    dependencies: Dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str


def create_app(
    catalog_factory: Optional[Callable[[], CatalogLookup]] = None,
    config: Optional[CompscanConfig] = None,
) -> FastAPI:
    """Create the FastAPI application exposing compscan operations."""

    settings = config or default_config()
    factory = catalog_factory or InMemoryCatalog
    app = FastAPI(title="Compscan Service", version="1.0.0")

    async def get_catalog() -> CatalogLookup:
        return factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/exports", response_model=ExportsResponse)
    def exports(payload: SourceRequest) -> ExportsResponse:
        parsed = parse_source(payload.code)
        return ExportsResponse(
            exports=[symbol.name for symbol in extract_exported_symbols(parsed)],
            demo_entry=extract_demo_entry_name(parsed),
        )

    @app.post("/imports", response_model=ImportsResponse)
    def imports(payload: SourceRequest) -> ImportsResponse:
        parsed = parse_source(payload.code)
        edges = classify_imports(parsed, settings.analysis)
        return ImportsResponse(
            imports=[
                ImportEdgeModel(**{**asdict(edge), "kind": edge.kind.value}) for edge in edges
            ]
        )

    @app.post("/strip", response_model=StripResponse)
    def strip(payload: StripRequest) -> StripResponse:
        result = strip_self_imports(payload.demo_code, payload.self_names)
        return StripResponse(
            modified_text=result.modified_text,
            removed_statements=result.removed_statements,
        )

    @app.post("/analyze", response_model=AnalyzeResponse)
    def analyze(payload: AnalyzeRequest) -> AnalyzeResponse:
        analysis = analyze_submission(
            payload.code,
            payload.demo_code,
            component_slug=payload.component_slug,
            known_direct=payload.known_direct,
            known_demo_direct=payload.known_demo_direct,
            skip_component_ambiguity=payload.skip_component_ambiguity,
            config=settings.analysis,
        )
        return AnalyzeResponse(**asdict(analysis))

    @app.post("/resolve", response_model=ResolveResponse)
    async def resolve(
        payload: ResolveRequest,
        catalog: CatalogLookup = Depends(get_catalog),
    ) -> ResolveResponse:
        unresolved = [UnknownDependency(**item.model_dump()) for item in payload.unresolved]
        graph = await resolve_graph(
            payload.refs,
            catalog,
            unresolved=unresolved,
            config=settings.resolver,
            with_demo_dependencies=payload.with_demo_dependencies,
        )
        return ResolveResponse(
            files=graph.files,
            library_deps=graph.library_deps,
            edges=graph.edges,
            errors=[BrokenDependencyModel(**asdict(error)) for error in graph.errors],
        )

    @app.post("/registry-item", response_model=None)
    async def registry_item(
        payload: RegistryItemRequest,
        catalog: CatalogLookup = Depends(get_catalog),
    ) -> Any:
        key = f"{payload.owner}/{payload.slug}"
        graph = await resolve_graph(
            [key], catalog, config=settings.resolver, with_demo_dependencies=False
        )
        if key not in graph.nodes:
            return JSONResponse(status_code=404, content={"detail": "Component not found"})
        return build_registry_item(payload.slug, payload.category, graph, payload.dependencies)

    @app.exception_handler(ParseFailure)
    async def parse_failure_handler(
        _: Any, exc: ParseFailure
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(AmbiguousDependencyPending)
    async def ambiguous_handler(_: Any, exc: AmbiguousDependencyPending) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "detail": str(exc),
                "pending": [asdict(dep) for dep in exc.pending],
            },
        )

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    catalog_path: Optional[Path] = None,
    config: Optional[CompscanConfig] = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    settings = config or default_config()
    catalog_factory: Optional[Callable[[], CatalogLookup]] = None
    if catalog_path is not None:
        catalog = load_catalog(catalog_path, default_category=settings.resolver.default_category)
        logger.info("Serving catalog %s with %d entries", catalog_path, len(catalog))

        def _file_catalog() -> CatalogLookup:
            return catalog

        catalog_factory = _file_catalog

    app = create_app(catalog_factory, settings)
    uvicorn.run(app, host=host, port=port)
