"""CSS custom property helpers for preview stylesheets."""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

from .constants import BASE_CSS, BODY_CSS, DARK_CSS_VARS, LIGHT_CSS_VARS

_ROOT_BLOCK = re.compile(r":root\s*{([^}]*)}")
_DARK_BLOCK = re.compile(r"\.dark\s*{([^}]*)}")
_VARIABLE = re.compile(r"--([^:;{}\s]+)\s*:\s*([^;]+);")


def extract_css_vars(css: str) -> Dict[str, Dict[str, str]]:
    """Collect ``--name: value`` pairs from the ``:root`` and ``.dark`` blocks."""
    return {
        "light": _block_vars(_ROOT_BLOCK.search(css)),
        "dark": _block_vars(_DARK_BLOCK.search(css)),
    }


def render_stylesheet(custom_css: Optional[str] = None) -> str:
    """Return the preview stylesheet with custom variables layered over the defaults."""
    custom = extract_css_vars(custom_css or "")
    light = {**LIGHT_CSS_VARS, **custom["light"]}
    dark = {**DARK_CSS_VARS, **custom["dark"]}

    parts = [
        BASE_CSS,
        "@layer base {\n" + _render_block(":root", light) + "\n" + _render_block(".dark", dark) + "}\n",
        BODY_CSS,
    ]
    if custom_css and custom_css.strip():
        parts.append(custom_css.strip() + "\n")
    return "\n".join(parts)


def _block_vars(match: Optional[re.Match[str]]) -> Dict[str, str]:
    if match is None:
        return {}
    return {f"--{name.strip()}": value.strip() for name, value in _VARIABLE.findall(match.group(1))}


def _render_block(selector: str, variables: Mapping[str, str]) -> str:
    lines = [f"  {selector} {{"]
    lines.extend(f"    {name}: {value};" for name, value in variables.items())
    lines.append("  }")
    return "\n".join(lines) + "\n"


__all__ = ["extract_css_vars", "render_stylesheet"]
