"""Immutable graph value returned by a build, with its provenance metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

import semantic_version

from bomgraph.core.edges import SkippedEdge
from bomgraph.core.errors import InvalidToolVersion
from bomgraph.core.identity import PackageDescriptor
from bomgraph.core.registry import Component

@dataclass(frozen=True)
class Tool:
    """The tool that produced the graph."""

    vendor: str
    name: str
    version: str

    def __post_init__(self) -> None:
        try:
            semantic_version.Version(self.version)
        except (TypeError, ValueError) as exc:
            raise InvalidToolVersion(f"Tool version must be a semantic version, got {self.version!r}") from exc

    def to_dict(self) -> Dict[str, str]:
        return {"vendor": self.vendor, "name": self.name, "version": self.version}


@dataclass(frozen=True)
class Metadata:
    tools: Tuple[Tool, ...] = ()
    component: Optional[Component] = None

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"tools": [tool.to_dict() for tool in self.tools]}
        if self.component:
            payload["component"] = self.component.to_dict()
        return payload


@dataclass(frozen=True, order=True)
class Relation:
    """``requester`` requires ``dependency``."""

    requester: str
    dependency: str


@dataclass(frozen=True)
class Graph:
    """Components plus the requires-relation between their identities.

    ``dependencies`` maps every identity that appeared as a relation
    endpoint, including identities with no component, to a duplicate-free
    tuple of its dependencies in first-link order.
    """

    metadata: Metadata
    components: Tuple[Component, ...] = ()
    dependencies: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    packages: Mapping[str, PackageDescriptor] = field(default_factory=lambda: MappingProxyType({}))
    locations: Mapping[str, FrozenSet[str]] = field(default_factory=lambda: MappingProxyType({}))
    roots: Tuple[str, ...] = ()
    skipped: Tuple[SkippedEdge, ...] = ()

    @property
    def relations(self) -> FrozenSet[Relation]:
        return frozenset(
            Relation(requester, dependency)
            for requester, targets in self.dependencies.items()
            for dependency in targets
        )

    @property
    def bom_refs(self) -> FrozenSet[str]:
        return frozenset(component.bom_ref for component in self.components)
