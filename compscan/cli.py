"""CLI entrypoints for compscan commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .analyzers import (
    analyze_submission,
    classify_imports,
    extract_demo_entry_name,
    extract_exported_symbols,
    parse_source,
    strip_self_imports,
)
from .config import CompscanConfig, ConfigError, load_config
from .errors import CompscanError
from .logging import configure_logging
from .resolver import load_catalog, resolve_graph_sync


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_source_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("file", help=help_text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compscan",
        description="Inspect component sources and resolve their catalog dependencies.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .compscan.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument("--log-file", help="Also write log records to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    exports_parser = subparsers.add_parser("exports", help="List names exported by a module.")
    _add_verbose_option(exports_parser, suppress_default=True)
    _add_source_argument(exports_parser, "Component or demo source file.")

    imports_parser = subparsers.add_parser("imports", help="Classify the imports of a module.")
    _add_verbose_option(imports_parser, suppress_default=True)
    _add_source_argument(imports_parser, "Component or demo source file.")

    strip_parser = subparsers.add_parser(
        "strip", help="Remove imports of the published component from a demo file."
    )
    _add_verbose_option(strip_parser, suppress_default=True)
    _add_source_argument(strip_parser, "Demo source file.")
    strip_parser.add_argument(
        "--self",
        dest="self_names",
        nargs="+",
        required=True,
        metavar="NAME",
        help="Names exported by the component being published.",
    )
    strip_parser.add_argument(
        "--write",
        action="store_true",
        help="Rewrite the demo file in place instead of printing the result.",
    )

    analyze_parser = subparsers.add_parser(
        "analyze", help="Report names and dependencies of a component/demo pair."
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_source_argument(analyze_parser, "Component source file.")
    analyze_parser.add_argument("--demo", help="Demo source file.")
    analyze_parser.add_argument("--slug", default="", help="Slug of the component being published.")
    analyze_parser.add_argument(
        "--known",
        nargs="*",
        default=[],
        metavar="OWNER/SLUG",
        help="Catalog references already resolved for the component.",
    )
    analyze_parser.add_argument(
        "--known-demo",
        nargs="*",
        default=[],
        metavar="OWNER/SLUG",
        help="Catalog references already resolved for the demo.",
    )
    analyze_parser.add_argument(
        "--skip-component-ambiguity",
        action="store_true",
        help="Only report ambiguous imports of the demo (component already published).",
    )

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve catalog references into a file set and library map."
    )
    _add_verbose_option(resolve_parser, suppress_default=True)
    resolve_parser.add_argument("refs", nargs="+", metavar="OWNER/SLUG", help="Direct references.")
    resolve_parser.add_argument(
        "--catalog", required=True, help="YAML catalog file to resolve against."
    )
    resolve_parser.add_argument(
        "--with-demo-dependencies",
        action="store_true",
        help="Also follow demo-only references of nested catalog entries.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--catalog", help="YAML catalog file for /resolve requests.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for compscan commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    try:
        payload = _run(args, config)
    except (CompscanError, OSError, ValueError) as exc:
        parser.exit(1, f"compscan {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    if payload is not None:
        print(json.dumps(payload, indent=2))


def _run(args: argparse.Namespace, config: CompscanConfig) -> Any:
    if args.command == "exports":
        parsed = parse_source(_read(args.file))
        return {
            "exports": [symbol.name for symbol in extract_exported_symbols(parsed)],
            "demo_entry": extract_demo_entry_name(parsed),
        }
    if args.command == "imports":
        parsed = parse_source(_read(args.file))
        return [_edge_payload(asdict(edge)) for edge in classify_imports(parsed, config.analysis)]
    if args.command == "strip":
        result = strip_self_imports(_read(args.file), args.self_names)
        if args.write and result.removed_statements:
            Path(args.file).write_text(result.modified_text, encoding="utf-8")
            return {"removed": result.removed_statements}
        return asdict(result)
    if args.command == "analyze":
        analysis = analyze_submission(
            _read(args.file),
            _read(args.demo) if args.demo else "",
            component_slug=args.slug,
            known_direct=args.known,
            known_demo_direct=args.known_demo,
            skip_component_ambiguity=args.skip_component_ambiguity,
            config=config.analysis,
        )
        return asdict(analysis)
    if args.command == "resolve":
        catalog = load_catalog(Path(args.catalog), default_category=config.resolver.default_category)
        graph = resolve_graph_sync(
            args.refs,
            catalog,
            config=config.resolver,
            with_demo_dependencies=args.with_demo_dependencies,
        )
        return {
            "files": graph.files,
            "library_deps": graph.library_deps,
            "edges": graph.edges,
            "errors": [asdict(error) for error in graph.errors],
        }
    if args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(
            host=args.host,
            port=args.port,
            catalog_path=Path(args.catalog) if args.catalog else None,
            config=config,
        )
        return None
    raise ValueError(f"Unknown command {args.command!r}")  # pragma: no cover - argparse enforces choices


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _edge_payload(edge: dict[str, Any]) -> dict[str, Any]:
    edge["kind"] = edge["kind"].value
    return {key: value for key, value in edge.items() if value is not None}


if __name__ == "__main__":
    main(sys.argv[1:])
