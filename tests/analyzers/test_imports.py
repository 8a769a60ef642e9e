"""Tests for import classification."""

from __future__ import annotations

from compscan.analyzers import (
    ambiguous_catalog_dependencies,
    classify_imports,
    classify_path,
    direct_catalog_dependencies,
    library_dependencies,
    parse_source,
)
from compscan.config import AnalysisConfig
from compscan.models import ImportKind


def _edges(text: str, config: AnalysisConfig | None = None):
    return classify_imports(parse_source(text), config)


def test_relative_and_alias_imports_are_ignored() -> None:
    text = """
import a from "./local"
import b from "../shared/b"
import { cn } from "@/lib/utils"
"""

    assert _edges(text) == []


def test_components_alias_is_ambiguous() -> None:
    edges = _edges('import { Button } from "@/components/ui/button"\n')

    assert len(edges) == 1
    edge = edges[0]
    assert edge.kind is ImportKind.CATALOG_AMBIGUOUS
    assert edge.slug == "button"
    assert edge.category == "ui"
    assert edge.imported_names == ["Button"]


def test_direct_reference_carries_owner_and_slug() -> None:
    edges = _edges('import { Card } from "+@shadcn/card"\n')

    assert [(edge.kind, edge.owner, edge.slug) for edge in edges] == [
        (ImportKind.CATALOG_DIRECT, "shadcn", "card")
    ]


def test_library_imports_use_package_names() -> None:
    text = """
import { motion } from "motion/react"
import * as Dialog from "@radix-ui/react-dialog"
import Foo, { Bar as Baz } from "some-lib/sub/path"
import "swiper/css"
"""

    edges = _edges(text)
    assert [edge.package for edge in edges] == [
        "motion",
        "@radix-ui/react-dialog",
        "some-lib",
        "swiper",
    ]
    assert edges[1].imported_names == ["Dialog"]
    assert edges[2].imported_names == ["Foo", "Baz"]
    assert edges[3].imported_names == []


def test_runtime_and_reserved_packages_are_excluded() -> None:
    text = """
import React from "react"
import { createRoot } from "react-dom/client"
import Link from "next/link"
import { useTheme } from "next-themes"
import config from "tailwindcss"
"""

    assert _edges(text) == []


def test_reexports_are_classified() -> None:
    edges = _edges('export { cva } from "class-variance-authority"\n')

    assert [edge.package for edge in edges] == ["class-variance-authority"]


def test_type_imports_are_classified() -> None:
    edges = _edges('import type { ButtonProps } from "@/components/ui/button"\n')

    assert [(edge.kind, edge.imported_names) for edge in edges] == [
        (ImportKind.CATALOG_AMBIGUOUS, ["ButtonProps"])
    ]


def test_duplicates_are_kept_as_edges_and_merged_in_maps() -> None:
    text = """
import { Check } from "lucide-react"
import { X } from "lucide-react"
import { Tooltip } from "+@acme/tooltip"
import { TooltipTrigger } from "+@acme/tooltip"
import { Input } from "@/components/ui/input"
import { InputGroup } from "@/components/ui/input"
"""

    edges = _edges(text)
    assert len(edges) == 6
    assert library_dependencies(edges) == {"lucide-react": "latest"}
    assert direct_catalog_dependencies(edges) == ["acme/tooltip"]
    assert [edge.slug for edge in ambiguous_catalog_dependencies(edges)] == ["input"]


def test_classify_path_edge_cases() -> None:
    assert classify_path("/absolute/module") is None
    assert classify_path("@/components/button") is None
    assert classify_path("+@not-a-ref") is None
    nested = classify_path("@/components/blocks/hero/hero-section")
    assert nested is not None
    assert (nested.category, nested.slug) == ("blocks", "hero-section")


def test_configured_runtime_packages_are_respected() -> None:
    config = AnalysisConfig(runtime_packages=["lucide-react"], reserved_prefixes=[])
    text = """
import { Check } from "lucide-react"
import React from "react"
"""

    assert [edge.package for edge in _edges(text, config)] == ["react"]
