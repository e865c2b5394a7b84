"""Deduplicated component store and per-identity relation holders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set

from bomgraph.core.identity import PackageDescriptor


@dataclass(frozen=True)
class Component:
    """A package instance in the graph, keyed by its package URL."""

    bom_ref: str
    descriptor: PackageDescriptor

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def version(self) -> str:
        return self.descriptor.version

    @property
    def group(self) -> Optional[str]:
        return self.descriptor.scope

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "bom-ref": self.bom_ref,
            "purl": self.bom_ref,
            "name": self.name,
            "version": self.version,
        }
        if self.group:
            payload["group"] = self.group
        return payload


class ComponentRegistry:
    """Components keyed by ``bom_ref``; the first insertion for an identity wins."""

    def __init__(self) -> None:
        self._by_ref: Dict[str, Component] = {}

    def add(self, bom_ref: str, descriptor: PackageDescriptor) -> bool:
        """Insert a component unless one already exists. Returns ``True`` on insert."""

        if bom_ref in self._by_ref:
            return False
        self._by_ref[bom_ref] = Component(bom_ref=bom_ref, descriptor=descriptor)
        return True

    def get(self, bom_ref: str) -> Optional[Component]:
        return self._by_ref.get(bom_ref)

    def __contains__(self, bom_ref: object) -> bool:
        return bom_ref in self._by_ref

    def __iter__(self) -> Iterator[Component]:
        return iter(self._by_ref.values())

    def __len__(self) -> int:
        return len(self._by_ref)


class RelationIndex:
    """One holder per identity listing what that identity depends on.

    A holder can exist for an identity that never became a component.
    """

    def __init__(self) -> None:
        self._holders: Dict[str, List[str]] = {}
        self._members: Dict[str, Set[str]] = {}

    def ensure(self, bom_ref: str) -> None:
        if bom_ref not in self._holders:
            self._holders[bom_ref] = []
            self._members[bom_ref] = set()

    def link(self, requester: str, dependency: str) -> bool:
        """Record ``requester -> dependency``. Returns ``False`` for a repeat or self-loop."""

        if requester == dependency:
            return False
        self.ensure(requester)
        self.ensure(dependency)
        if dependency in self._members[requester]:
            return False
        self._members[requester].add(dependency)
        self._holders[requester].append(dependency)
        return True

    def dependencies_of(self, bom_ref: str) -> List[str]:
        return list(self._holders.get(bom_ref, []))

    def __contains__(self, bom_ref: object) -> bool:
        return bom_ref in self._holders

    def __iter__(self) -> Iterator[str]:
        return iter(self._holders)

    def __len__(self) -> int:
        return len(self._holders)
