"""Hierarchical dependency tree and detection of the project's own root packages."""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from bomgraph.core.graph import Graph
from bomgraph.core.identity import PackageDescriptor

DEFAULT_VENDOR_DIRS = ("node_modules",)


@dataclass(eq=False)
class DependencyNode:
    """One name/version of a package and where it sits in the tree."""

    bom_ref: str
    descriptor: PackageDescriptor
    locations: Set[str] = field(default_factory=set)
    required_by: List["DependencyNode"] = field(default_factory=list)
    dependencies: List["DependencyNode"] = field(default_factory=list)
    root_package: bool = False

    def add_dependency(self, node: "DependencyNode") -> None:
        if node not in self.dependencies:
            self.dependencies.append(node)
        if self not in node.required_by:
            node.required_by.append(self)

    def is_vendored_only(self, vendor_dirs: Sequence[str] = DEFAULT_VENDOR_DIRS) -> bool:
        return all(_is_vendored(location, vendor_dirs) for location in self.locations)


@dataclass
class PackageVersions:
    versions: Dict[str, DependencyNode] = field(default_factory=dict)


@dataclass
class DependencyTree:
    """Nodes looked up by package name, then version."""

    lookup_map: Dict[str, PackageVersions] = field(default_factory=dict)
    roots: List[DependencyNode] = field(default_factory=list)

    def add_node(self, node: DependencyNode) -> DependencyNode:
        """Insert *node* unless its name/version is present; return the stored node."""

        versions = self.lookup_map.setdefault(node.descriptor.full_name, PackageVersions()).versions
        existing = versions.get(node.descriptor.version)
        if existing is not None:
            existing.locations.update(node.locations)
            return existing
        versions[node.descriptor.version] = node
        return node

    def get(self, name: str, version: str) -> Optional[DependencyNode]:
        entry = self.lookup_map.get(name)
        return entry.versions.get(version) if entry else None

    def add_root(self, node: DependencyNode) -> None:
        if node not in self.roots:
            self.roots.append(node)

    def nodes(self) -> List[DependencyNode]:
        return [node for entry in self.lookup_map.values() for node in entry.versions.values()]


def find_roots(tree: DependencyTree, vendor_dirs: Sequence[str] = DEFAULT_VENDOR_DIRS) -> List[DependencyNode]:
    """Mark and collect nodes nothing requires that live outside vendored directories.

    Running it again over the same tree yields the same roots.
    """

    found: List[DependencyNode] = []
    for node in tree.nodes():
        if node.required_by or node.is_vendored_only(vendor_dirs):
            continue
        node.root_package = True
        tree.add_root(node)
        found.append(node)
    return found


def tree_from_graph(graph: Graph) -> DependencyTree:
    """Build the name/version tree from a flat graph.

    Every identity with a relation holder becomes a node, whether or not the
    graph holds a component for it.
    """

    tree = DependencyTree()
    by_ref: Dict[str, DependencyNode] = {}
    for bom_ref in graph.dependencies:
        descriptor = graph.packages.get(bom_ref)
        if descriptor is None:
            continue
        node = DependencyNode(
            bom_ref=bom_ref,
            descriptor=descriptor,
            locations=set(graph.locations.get(bom_ref, ())),
        )
        by_ref[bom_ref] = tree.add_node(node)
    for requester, targets in graph.dependencies.items():
        parent = by_ref.get(requester)
        if parent is None:
            continue
        for target in targets:
            child = by_ref.get(target)
            if child is not None:
                parent.add_dependency(child)
    return tree


def _is_vendored(location: str, vendor_dirs: Sequence[str]) -> bool:
    parts = pathlib.PurePath(location).parts
    return any(vendor_dir in parts for vendor_dir in vendor_dirs)
