"""Preview bundle assembly and registry item documents."""

from .bundle import build_preview_manifest, render_entry
from .registry import build_registry_item
from .styles import extract_css_vars, render_stylesheet

__all__ = [
    "build_preview_manifest",
    "build_registry_item",
    "extract_css_vars",
    "render_entry",
    "render_stylesheet",
]
