"""Tests for exported symbol extraction."""

from __future__ import annotations

from compscan.analyzers import (
    extract_demo_component_names,
    extract_demo_entry_name,
    extract_exported_symbols,
    extract_exported_types,
    parse_source,
)


def _exports(text: str) -> list[str]:
    return [symbol.name for symbol in extract_exported_symbols(parse_source(text))]


def test_collects_declarations_and_brace_exports() -> None:
    text = """
export const a = 1, b = 2
export class Card {}
function helper() {}
export { helper as util }
export default Card
"""

    assert _exports(text) == ["a", "b", "Card", "util"]


def test_default_alias_of_existing_export_is_not_duplicated() -> None:
    text = "export function Button() {}\nexport { Button as default }\n"

    assert _exports(text) == ["Button"]


def test_anonymous_default_export_contributes_nothing() -> None:
    assert _exports("export default function () { return null }\n") == []


def test_named_default_declarations_are_reported() -> None:
    assert _exports("export default class Panel {}\n") == ["Panel"]
    assert _exports("export default function Hero() { return null }\n") == ["Hero"]


def test_destructured_variable_exports() -> None:
    assert _exports("export const { x, y: z } = source\n") == ["x", "z"]


def test_type_only_exports_are_not_values() -> None:
    text = """
export type ButtonProps = { size: number }
export interface CardProps { title: string }
export function Button(props: ButtonProps) { return null }
"""

    parsed = parse_source(text)
    assert [symbol.name for symbol in extract_exported_symbols(parsed)] == ["Button"]
    assert extract_exported_types(parsed) == ["ButtonProps", "CardProps"]


def test_bare_export_statement_is_recognised() -> None:
    text = "function Button() { return null }\nexport Button;\n"

    assert "Button" in _exports(text)


def test_demo_entry_name_skips_lowercase_and_default_exports() -> None:
    text = """
import { Button } from "@/components/ui/button"
export default function Fallback() { return null }
export function demoHelper() {}
export function ButtonDemo() { return <Button /> }
"""

    assert extract_demo_entry_name(parse_source(text)) == "ButtonDemo"


def test_demo_entry_name_is_none_without_named_function() -> None:
    assert extract_demo_entry_name(parse_source("export const Demo = () => null\n")) is None


def test_demo_component_names_cover_object_default_export() -> None:
    text = """
function First() { return null }
function Second() { return null }
export function Third() { return null }
export default { First, Second }
"""

    assert extract_demo_component_names(parse_source(text)) == ["Third", "First", "Second"]


def test_demo_component_names_exclude_plain_default_export() -> None:
    text = """
export const Primary = () => null
export default function Showcase() { return null }
"""

    assert extract_demo_component_names(parse_source(text)) == ["Primary"]


def test_unaliased_default_reexport_is_anonymous() -> None:
    assert _exports('export { default } from "./button"\n') == []
    assert _exports('export { default as Button } from "./button"\n') == ["Button"]
