"""Tests for preview manifest assembly."""

from __future__ import annotations

import json

from compscan.models import DependencyGraph
from compscan.preview import build_preview_manifest, render_entry


def _graph() -> DependencyGraph:
    return DependencyGraph(
        files={
            "/components/ui/button.tsx": "export function Button() {}",
            "/components/ui/hero.tsx": "stale copy",
        },
        library_deps={"motion": "latest", "react": "19.0.0"},
    )


def test_manifest_merges_graph_and_scaffold_files() -> None:
    manifest = build_preview_manifest(
        _graph(),
        code="export function Hero() {}",
        demo_code="export function HeroDemo() {}",
        component_slug="hero",
        demo_component_names=["HeroDemo"],
    )

    assert manifest.entry == "/App.tsx"
    assert manifest.files["/components/ui/button.tsx"] == "export function Button() {}"
    assert manifest.files["/components/ui/hero.tsx"] == "export function Hero() {}"
    assert manifest.files["/demo.tsx"] == "export function HeroDemo() {}"
    assert "HeroDemo" in manifest.files["/App.tsx"]
    assert "export function cn" in manifest.files["/lib/utils.ts"]
    assert json.loads(manifest.files["/tsconfig.json"])
    assert ":root" in manifest.files["/styles.css"]


def test_manifest_dependency_precedence() -> None:
    manifest = build_preview_manifest(
        _graph(),
        code="",
        demo_code="",
        component_slug="hero",
        library_deps={"motion": "11.0.0"},
        demo_library_deps={"lucide-react": "0.400.0"},
    )

    assert manifest.dependencies["react"] == "19.0.0"
    assert manifest.dependencies["clsx"] == "latest"
    assert manifest.dependencies["motion"] == "11.0.0"
    assert manifest.dependencies["lucide-react"] == "0.400.0"


def test_render_entry_applies_theme_and_variants() -> None:
    entry = render_entry(["First", "Second", "First"], theme="dark")

    assert "import DefaultDemoExport, { First, Second } from './demo';" in entry
    assert 'const demoComponentNames = ["First", "Second"];' in entry
    assert 'className="dark relative' in entry


def test_render_entry_without_named_variants() -> None:
    entry = render_entry([])

    assert "import DefaultDemoExport from './demo';" in entry
    assert "const demoComponentNames = [];" in entry
