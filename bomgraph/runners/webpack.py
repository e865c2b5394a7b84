"""Extract module edges from webpack ``stats.json`` output."""

from __future__ import annotations

import json
import pathlib
from typing import Dict, Iterable, List, Optional, Sequence

from bomgraph.core.edges import DEFAULT_IGNORED_PREFIXES, ModuleEdge


def load_stats(path: pathlib.Path) -> List[Dict[str, object]]:
    """Return every module record in a stats file, including child compilations."""

    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Unsupported stats document in {path}; expected a JSON object")
    return list(_iter_modules(data))


def edges_from_modules(
    modules: Iterable[Dict[str, object]],
    ignored_prefixes: Sequence[str] = DEFAULT_IGNORED_PREFIXES,
) -> List[ModuleEdge]:
    """Map each module's issuer/resource pair to an edge.

    Modules without an issuer or a resource (node built-ins, webpack
    ``externals``) and those issued by an ignored or external module are
    dropped.
    """

    edges: List[ModuleEdge] = []
    for module in modules:
        if not isinstance(module, dict):
            continue
        edge = ModuleEdge(requester=_issuer_resource(module), dependency=_module_resource(module, ignored_prefixes))
        if edge.is_ignored(ignored_prefixes):
            continue
        edges.append(edge)
    return edges


def _iter_modules(data: Dict[str, object]) -> Iterable[Dict[str, object]]:
    for module in data.get("modules") or []:
        if isinstance(module, dict):
            yield module
    for child in data.get("children") or []:
        if isinstance(child, dict):
            yield from _iter_modules(child)


def _issuer_resource(module: Dict[str, object]) -> Optional[str]:
    issuer = module.get("issuer")
    if isinstance(issuer, dict):
        return _string(issuer.get("resource"))
    # JSON stats carry the issuer identifier instead of the module object
    return _strip_loaders(_string(issuer))


def _module_resource(module: Dict[str, object], ignored_prefixes: Sequence[str]) -> Optional[str]:
    resource = _string(module.get("resource"))
    if resource:
        return resource
    identifier = _string(module.get("identifier"))
    if identifier is None or identifier.startswith(tuple(ignored_prefixes)):
        return None
    return _strip_loaders(identifier)


def _strip_loaders(identifier: Optional[str]) -> Optional[str]:
    if identifier is None:
        return None
    return _string(identifier.rsplit("!", 1)[-1])


def _string(value: object) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None
