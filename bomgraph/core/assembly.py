"""Assemble a complete, immutable graph for one build invocation."""

from __future__ import annotations

import dataclasses
import functools
import logging
from types import MappingProxyType
from typing import Iterable, Optional

from bomgraph.core.builder import BuildResult, RelationBuilder
from bomgraph.core.config import BuildConfig
from bomgraph.core.edges import ModuleEdge
from bomgraph.core.graph import Graph, Metadata, Tool
from bomgraph.core.locator import Locator, locate_descriptor
from bomgraph.core.registry import Component
from bomgraph.core.roots import find_roots, tree_from_graph

_LOG = logging.getLogger(__name__)


def resolve_components(
    edges: Iterable[ModuleEdge],
    config: Optional[BuildConfig] = None,
    locator: Optional[Locator] = None,
) -> Graph:
    """Build the graph for *edges*, stamped with the configured tool metadata.

    An invalid tool version raises before any edge is processed.
    """

    config = config or BuildConfig()
    tool = Tool(vendor=config.tool.vendor, name=config.tool.name, version=config.tool.version)
    metadata = Metadata(tools=(tool,))

    builder = RelationBuilder(
        locator=locator or functools.partial(locate_descriptor, filename=config.descriptor_filename),
        ecosystem=config.ecosystem,
        ignored_prefixes=config.ignored_prefixes,
        include_requesters=config.include_requesters,
        workers=config.workers,
    )
    graph = freeze(builder.build(edges), metadata)
    if config.detect_roots:
        graph = with_roots(graph, config.vendor_dirs)
    _LOG.info(
        "Resolved %d components, %d relations, %d roots (%d edges skipped)",
        len(graph.components),
        len(graph.relations),
        len(graph.roots),
        len(graph.skipped),
    )
    return graph


def freeze(result: BuildResult, metadata: Metadata) -> Graph:
    return Graph(
        metadata=metadata,
        components=tuple(result.registry),
        dependencies=MappingProxyType(
            {bom_ref: tuple(result.relations.dependencies_of(bom_ref)) for bom_ref in result.relations}
        ),
        packages=MappingProxyType(dict(result.packages)),
        locations=MappingProxyType({ref: frozenset(paths) for ref, paths in result.locations.items()}),
        skipped=tuple(result.skipped),
    )


def with_roots(graph: Graph, vendor_dirs: Iterable[str]) -> Graph:
    """Return a copy of *graph* with its root packages detected.

    A single root also becomes the metadata component.
    """

    tree = tree_from_graph(graph)
    roots = find_roots(tree, tuple(vendor_dirs))
    metadata = graph.metadata
    if len(roots) == 1:
        root = roots[0]
        metadata = dataclasses.replace(metadata, component=Component(bom_ref=root.bom_ref, descriptor=root.descriptor))
    return dataclasses.replace(graph, metadata=metadata, roots=tuple(node.bom_ref for node in roots))
