"""Tests for the tolerant source parser."""

from __future__ import annotations

import pytest

from compscan.analyzers import classify_imports, extract_exported_symbols, parse_source
from compscan.errors import ParseFailure


def test_parse_source_returns_program_tree() -> None:
    parsed = parse_source("export const Button = () => <button>Hi</button>\n")

    assert parsed.root.type == "program"
    assert not parsed.root.has_error
    assert parsed.text.startswith("export const Button")


def test_parse_source_accepts_utf8_bytes() -> None:
    parsed = parse_source("export const label = 'héllo'\n".encode("utf-8"))

    assert [symbol.name for symbol in extract_exported_symbols(parsed)] == ["label"]


def test_parse_source_rejects_binary_input() -> None:
    with pytest.raises(ParseFailure):
        parse_source("\x00\x01\x02garbage")


def test_parse_source_rejects_invalid_utf8() -> None:
    with pytest.raises(ParseFailure):
        parse_source(b"\xff\xfe\xfa")


def test_parse_source_recovers_from_local_syntax_errors() -> None:
    parsed = parse_source(
        'import { Button } from "@/components/ui/button";\n'
        "const = ;\n"
        "export function Demo() { return null }\n"
    )

    assert parsed.root.has_error
    assert [edge.slug for edge in classify_imports(parsed)] == ["button"]
    assert "Demo" in [symbol.name for symbol in extract_exported_symbols(parsed)]


def test_parse_source_accepts_empty_text() -> None:
    parsed = parse_source("")

    assert extract_exported_symbols(parsed) == []


def test_parse_source_rejects_lone_surrogates() -> None:
    with pytest.raises(ParseFailure):
        parse_source("const a = '\ud800'\n")
