"""Locate the nearest ``package.json`` enclosing a module path."""

from __future__ import annotations

import json
import pathlib
from typing import Callable, Dict, Iterator

from bomgraph.core.errors import DescriptorNotFound, InvalidDescriptor
from bomgraph.core.identity import PackageDescriptor, split_scoped_name

DESCRIPTOR_FILENAME = "package.json"

Locator = Callable[[str], PackageDescriptor]


def locate_descriptor(path: str | pathlib.Path, filename: str = DESCRIPTOR_FILENAME) -> PackageDescriptor:
    """Search upward from *path* and return the first descriptor found.

    Module paths usually point at files, which never contain a descriptor, so
    the search effectively begins in the file's directory.
    """

    for candidate in _search_dirs(pathlib.Path(path)):
        descriptor_path = candidate / filename
        if descriptor_path.is_file():
            return read_descriptor(descriptor_path)
    raise DescriptorNotFound(str(path))


def read_descriptor(descriptor_path: pathlib.Path) -> PackageDescriptor:
    try:
        data = json.loads(descriptor_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidDescriptor(str(descriptor_path), f"malformed JSON at line {exc.lineno}") from exc
    if not isinstance(data, dict):
        raise InvalidDescriptor(str(descriptor_path), "expected a JSON object")
    return descriptor_from_dict(data, str(descriptor_path))


def descriptor_from_dict(data: Dict[str, object], path: str | None = None) -> PackageDescriptor:
    scope, name = split_scoped_name(str(data.get("name") or ""))
    explicit_scope = data.get("scope")
    if explicit_scope:
        scope = str(explicit_scope).lstrip("@")
    version = data.get("version")
    return PackageDescriptor(
        name=name,
        version=str(version).strip() if version else "",
        scope=scope,
        path=path,
    )


def _search_dirs(start: pathlib.Path) -> Iterator[pathlib.Path]:
    start = start.absolute()
    yield start
    yield from start.parents
