"""Build configuration loaded from an optional YAML file."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

import yaml

from bomgraph import __version__
from bomgraph.core.edges import DEFAULT_IGNORED_PREFIXES
from bomgraph.core.errors import ConfigError
from bomgraph.core.identity import DEFAULT_ECOSYSTEM
from bomgraph.core.locator import DESCRIPTOR_FILENAME
from bomgraph.core.roots import DEFAULT_VENDOR_DIRS


@dataclass(frozen=True)
class ToolConfig:
    vendor: str = "CycloneDX"
    name: str = "webpack-plugin"
    version: str = __version__


@dataclass(frozen=True)
class BuildConfig:
    ecosystem: str = DEFAULT_ECOSYSTEM
    ignored_prefixes: Tuple[str, ...] = DEFAULT_IGNORED_PREFIXES
    vendor_dirs: Tuple[str, ...] = DEFAULT_VENDOR_DIRS
    descriptor_filename: str = DESCRIPTOR_FILENAME
    include_requesters: bool = False
    detect_roots: bool = True
    workers: int = 1
    tool: ToolConfig = field(default_factory=ToolConfig)

    def with_overrides(self, **overrides: Any) -> "BuildConfig":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_config(path: Optional[pathlib.Path]) -> BuildConfig:
    if path is None or not path.exists():
        return BuildConfig()
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return config_from_dict(data)


def config_from_dict(data: Dict[str, Any]) -> BuildConfig:
    defaults = BuildConfig()
    workers = data.get("workers", defaults.workers)
    try:
        workers = int(workers)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"workers must be an integer, got {workers!r}") from exc
    if workers < 1:
        raise ConfigError("workers must be at least 1")
    return BuildConfig(
        ecosystem=str(data.get("ecosystem") or defaults.ecosystem),
        ignored_prefixes=_ensure_tuple(data.get("ignored_prefixes"), defaults.ignored_prefixes),
        vendor_dirs=_ensure_tuple(data.get("vendor_dirs"), defaults.vendor_dirs),
        descriptor_filename=str(data.get("descriptor_filename") or defaults.descriptor_filename),
        include_requesters=_ensure_bool(data, "include_requesters", defaults.include_requesters),
        detect_roots=_ensure_bool(data, "detect_roots", defaults.detect_roots),
        workers=workers,
        tool=_tool_config(data.get("tool")),
    )


def _tool_config(value: object) -> ToolConfig:
    if value is None:
        return ToolConfig()
    if not isinstance(value, dict):
        raise ConfigError("tool must be a mapping with vendor, name and version")
    defaults = ToolConfig()
    return ToolConfig(
        vendor=str(value.get("vendor") or defaults.vendor),
        name=str(value.get("name") or defaults.name),
        version=str(value.get("version") or defaults.version),
    )


def _ensure_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _ensure_tuple(value: object, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, (list, tuple, set)):
        items: List[str] = [str(item) for item in value]
        return tuple(items)
    return (str(value),)
