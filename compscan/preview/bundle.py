"""Assembly of preview sandbox manifests from a resolved dependency graph."""

from __future__ import annotations

import json
from typing import Dict, Mapping, Optional, Sequence

from ..config import CompscanConfig, default_config
from ..models import DependencyGraph, LibraryDependencyMap, PreviewManifest
from .constants import (
    DEMO_PATH,
    ENTRY_PATH,
    STYLES_PATH,
    TSCONFIG,
    TSCONFIG_PATH,
    UTILS_PATH,
    UTILS_TS,
)
from .styles import render_stylesheet


def build_preview_manifest(
    graph: DependencyGraph,
    *,
    code: str,
    demo_code: str,
    component_slug: str,
    category: Optional[str] = None,
    owner: str = "",
    demo_component_names: Sequence[str] = (),
    library_deps: Optional[Mapping[str, str]] = None,
    demo_library_deps: Optional[Mapping[str, str]] = None,
    theme: Optional[str] = None,
    custom_css: Optional[str] = None,
    config: Optional[CompscanConfig] = None,
) -> PreviewManifest:
    """Merge graph files with generated scaffold files and the baseline libraries.

    The submitted component and demo take precedence over graph files at the
    same path.
    """
    config = config or default_config()
    category = category or config.resolver.default_category
    theme = theme or config.preview.theme
    component_path = config.resolver.path_template.format(
        owner=owner, slug=component_slug, category=category
    )

    files: Dict[str, str] = dict(graph.files)
    files.update(
        {
            ENTRY_PATH: render_entry(demo_component_names, theme=theme),
            DEMO_PATH: demo_code,
            component_path: code,
            UTILS_PATH: UTILS_TS,
            TSCONFIG_PATH: json.dumps(TSCONFIG, indent=2),
            STYLES_PATH: render_stylesheet(custom_css),
        }
    )

    dependencies: LibraryDependencyMap = dict(config.preview.baseline_dependencies)
    dependencies.update(graph.library_deps)
    dependencies.update(library_deps or {})
    dependencies.update(demo_library_deps or {})
    return PreviewManifest(files=files, dependencies=dependencies, entry=ENTRY_PATH)


def render_entry(demo_component_names: Sequence[str], *, theme: str = "light") -> str:
    """Render the entry module that switches between demo variants."""
    names = list(dict.fromkeys(demo_component_names))
    named_import = f", {{ {', '.join(names)} }}" if names else ""
    mapping = ",\n".join(f'    "{name}": {name}' for name in names)
    lines = [
        "import React, { useState } from 'react';",
        "import './styles.css';",
        f"import DefaultDemoExport{named_import} from './demo';",
        "",
        f"const demoComponentNames = {json.dumps(names)};",
        "const DemoComponents = {",
        "  ...{",
        mapping,
        "  },",
        "  ...(typeof DefaultDemoExport === 'function' ? { Default: DefaultDemoExport } : DefaultDemoExport),",
        "};",
        "",
        "export default function App() {",
        "  const [currentIndex, setCurrentIndex] = useState(0);",
        "  const entries = Object.entries(DemoComponents);",
        "  const CurrentComponent = entries[currentIndex]?.[1];",
        "",
        "  return (",
        f'    <div className="{theme} relative flex items-center justify-center h-screen w-full bg-background text-foreground">',
        "      {entries.length > 1 && (",
        '        <div className="absolute z-10 top-4 right-4 flex gap-2">',
        "          {entries.map(([name], index) => (",
        "            <button key={name} onClick={() => setCurrentIndex(index)}>",
        "              {name.replace(/([A-Z])/g, ' $1').trim()}",
        "            </button>",
        "          ))}",
        "        </div>",
        "      )}",
        "      {CurrentComponent ? <CurrentComponent /> : <div>Component not found</div>}",
        "    </div>",
        "  );",
        "}",
        "",
    ]
    return "\n".join(lines)


__all__ = ["build_preview_manifest", "render_entry"]
