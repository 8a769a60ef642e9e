"""Configuration loading for compscan (.compscan.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".compscan.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


def _default_runtime_packages() -> List[str]:
    return ["react", "react-dom", "tailwindcss"]


def _default_reserved_prefixes() -> List[str]:
    return ["next"]


def _default_package_aliases() -> Dict[str, str]:
    return {"motion/react": "motion"}


def _default_baseline_dependencies() -> Dict[str, str]:
    return {
        "react": "^18.0.0",
        "react-dom": "^18.0.0",
        "tailwind-merge": "latest",
        "clsx": "latest",
        "@radix-ui/react-select": "^1.0.0",
        "lucide-react": "latest",
    }


@dataclass
class AnalysisConfig:
    """Import classification conventions."""

    runtime_packages: List[str] = field(default_factory=_default_runtime_packages)
    reserved_prefixes: List[str] = field(default_factory=_default_reserved_prefixes)
    package_aliases: Dict[str, str] = field(default_factory=_default_package_aliases)
    alias_root: str = "@/"
    components_root: str = "@/components/"
    direct_marker: str = "+@"


@dataclass
class ResolverConfig:
    """Dependency graph resolution settings."""

    path_template: str = "/components/{category}/{slug}.tsx"
    default_category: str = "ui"


@dataclass
class PreviewConfig:
    """Preview bundle and catalog URL settings."""

    baseline_dependencies: Dict[str, str] = field(default_factory=_default_baseline_dependencies)
    app_host: str = "21st.dev"
    theme: str = "light"


@dataclass
class CompscanConfig:
    """Represents the settings defined in .compscan.yml."""

    root: Path
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)


def default_config() -> CompscanConfig:
    """Return the built-in configuration rooted at the working directory."""
    return CompscanConfig(root=Path.cwd())


def load_config(config_path: Path) -> CompscanConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CompscanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        if "runtime_packages" in analysis_data:
            analysis.runtime_packages = _as_str_list(analysis_data.get("runtime_packages"))
        if "reserved_prefixes" in analysis_data:
            analysis.reserved_prefixes = _as_str_list(analysis_data.get("reserved_prefixes"))
        if "package_aliases" in analysis_data:
            analysis.package_aliases = _as_str_map(analysis_data.get("package_aliases"))
        analysis.alias_root = _as_str(analysis_data.get("alias_root")) or analysis.alias_root
        analysis.components_root = (
            _as_str(analysis_data.get("components_root")) or analysis.components_root
        )
        analysis.direct_marker = _as_str(analysis_data.get("direct_marker")) or analysis.direct_marker
        if not analysis.components_root.endswith("/"):
            analysis.components_root += "/"

    resolver = ResolverConfig()
    resolver_data = _as_dict(data.get("resolver"))
    if resolver_data:
        resolver.path_template = _as_str(resolver_data.get("path_template")) or resolver.path_template
        resolver.default_category = (
            _as_str(resolver_data.get("default_category")) or resolver.default_category
        )
        _check_template(resolver.path_template)

    preview = PreviewConfig()
    preview_data = _as_dict(data.get("preview"))
    if preview_data:
        if "baseline_dependencies" in preview_data:
            preview.baseline_dependencies = _as_str_map(preview_data.get("baseline_dependencies"))
        preview.app_host = _as_str(preview_data.get("app_host")) or preview.app_host
        theme = _as_str(preview_data.get("theme"))
        if theme is not None:
            if theme not in {"light", "dark"}:
                raise ConfigError("preview.theme must be 'light' or 'dark'")
            preview.theme = theme

    return CompscanConfig(root=root, analysis=analysis, resolver=resolver, preview=preview)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _check_template(template: str) -> None:
    try:
        template.format(owner="o", slug="s", category="c")
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigError(f"Invalid resolver.path_template {template!r}: {exc}") from exc
    if "{slug}" not in template:
        raise ConfigError("resolver.path_template must contain {slug}")


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {
        str(key): str(item)
        for key, item in value.items()
        if isinstance(item, (str, int, float, bool))
    }


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "CompscanConfig",
    "ConfigError",
    "PreviewConfig",
    "ResolverConfig",
    "default_config",
    "load_config",
]
