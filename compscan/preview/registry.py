"""Registry item documents for package-manager style installs."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..models import DependencyGraph


def build_registry_item(
    name: str,
    category: str,
    graph: DependencyGraph,
    library_deps: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Describe a component and its resolved catalog files as a registry item.

    ``graph`` is expected to be resolved from the component itself, so its
    own file is among ``graph.files``.
    """
    path_categories = {
        path: graph.nodes[key].category for key, path in graph.paths.items() if key in graph.nodes
    }
    files: List[Dict[str, str]] = [
        {
            "path": path,
            "content": content,
            "type": f"registry:{path_categories.get(path, category)}",
            "target": "",
        }
        for path, content in graph.files.items()
    ]

    dependencies = list(dict.fromkeys([*(library_deps or {}), *graph.library_deps]))
    item: Dict[str, Any] = {"name": name, "type": f"registry:{category}"}
    if dependencies:
        item["dependencies"] = dependencies
    item["files"] = files
    return item


__all__ = ["build_registry_item"]
