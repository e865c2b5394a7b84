"""Package descriptors and their canonical package-URL identities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import quote

DEFAULT_ECOSYSTEM = "npm"
SCOPE_MARKER = "@"


@dataclass(frozen=True)
class PackageDescriptor:
    """Name, version and optional scope read from a ``package.json``."""

    name: str
    version: str
    scope: Optional[str] = None
    path: Optional[str] = None

    @property
    def full_name(self) -> str:
        if self.scope:
            return f"{_scope_namespace(self.scope)}/{self.name}"
        return self.name

    def key(self) -> Tuple[Optional[str], str, str]:
        return (self.scope, self.name, self.version)


def split_scoped_name(full_name: str) -> Tuple[Optional[str], str]:
    """Split ``"@babel/core"`` into ``("babel", "core")``.

    Unscoped names come back as ``(None, name)``.
    """

    full_name = (full_name or "").strip()
    if full_name.startswith(SCOPE_MARKER) and "/" in full_name:
        scope, name = full_name[1:].split("/", 1)
        if scope and name:
            return scope, name
    return None, full_name


def purl_of(descriptor: PackageDescriptor, ecosystem: str = DEFAULT_ECOSYSTEM) -> Optional[str]:
    """Return the package URL identifying *descriptor*, or ``None`` without a name.

    The result only depends on ecosystem, scope, name and version, so it is
    used directly as the component ``bom-ref`` and as a lookup key.
    """

    if not descriptor.name:
        return None
    segments = []
    if descriptor.scope:
        segments.append(_encode(_scope_namespace(descriptor.scope)))
    segments.append(_encode(descriptor.name))
    purl = f"pkg:{ecosystem.lower()}/" + "/".join(segments)
    if descriptor.version:
        purl += "@" + _encode(descriptor.version)
    return purl


def _scope_namespace(scope: str) -> str:
    return scope if scope.startswith(SCOPE_MARKER) else SCOPE_MARKER + scope


def _encode(segment: str) -> str:
    return quote(segment, safe="")
