"""Turn module edges into deduplicated components and requires-relations."""

from __future__ import annotations

import logging
import pathlib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from bomgraph.core.edges import DEFAULT_IGNORED_PREFIXES, ModuleEdge, SkippedEdge, SkipReason
from bomgraph.core.identity import DEFAULT_ECOSYSTEM, PackageDescriptor, purl_of
from bomgraph.core.locator import Locator, locate_descriptor
from bomgraph.core.registry import ComponentRegistry, RelationIndex

_LOG = logging.getLogger(__name__)

# A resolved endpoint, or the message explaining why it could not be resolved.
Resolution = Union[PackageDescriptor, str]


@dataclass
class BuildResult:
    """Mutable state of a single build pass."""

    registry: ComponentRegistry = field(default_factory=ComponentRegistry)
    relations: RelationIndex = field(default_factory=RelationIndex)
    packages: Dict[str, PackageDescriptor] = field(default_factory=dict)
    locations: Dict[str, Set[str]] = field(default_factory=dict)
    skipped: List[SkippedEdge] = field(default_factory=list)

    def skip(self, edge: ModuleEdge, reason: SkipReason, detail: str = "") -> None:
        self.skipped.append(SkippedEdge(edge=edge, reason=reason, detail=detail))

    def note(self, bom_ref: str, descriptor: PackageDescriptor, module_path: str) -> None:
        self.packages.setdefault(bom_ref, descriptor)
        location = str(pathlib.Path(descriptor.path).parent) if descriptor.path else module_path
        self.locations.setdefault(bom_ref, set()).add(location)


class RelationBuilder:
    """Resolve each edge's endpoints to packages and relate their identities.

    Descriptor lookups for distinct paths may run on a thread pool; every
    registry and relation mutation happens afterwards on the calling thread,
    in edge order.
    """

    def __init__(
        self,
        locator: Optional[Locator] = None,
        ecosystem: str = DEFAULT_ECOSYSTEM,
        ignored_prefixes: Sequence[str] = DEFAULT_IGNORED_PREFIXES,
        include_requesters: bool = False,
        workers: int = 1,
    ) -> None:
        self.locator = locator or locate_descriptor
        self.ecosystem = ecosystem
        self.ignored_prefixes = tuple(ignored_prefixes)
        self.include_requesters = include_requesters
        self.workers = max(1, workers)

    def build(self, edges: Iterable[ModuleEdge]) -> BuildResult:
        result = BuildResult()
        accepted: List[ModuleEdge] = []
        for edge in edges:
            if edge.is_ignored(self.ignored_prefixes):
                _LOG.debug("Skipping ignored or incomplete edge %s -> %s", edge.requester, edge.dependency)
                result.skip(edge, SkipReason.MALFORMED_EDGE)
                continue
            accepted.append(edge)

        paths = sorted({path for edge in accepted for path in (edge.requester, edge.dependency) if path})
        resolved = self._resolve_all(paths)
        for edge in accepted:
            self._apply(edge, resolved, result)
        _LOG.debug(
            "Built %d components and %d relation holders; skipped %d edges",
            len(result.registry),
            len(result.relations),
            len(result.skipped),
        )
        return result

    def _resolve_all(self, paths: Sequence[str]) -> Dict[str, Resolution]:
        if self.workers == 1 or len(paths) < 2:
            return {path: self._resolve(path) for path in paths}
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            return dict(zip(paths, executor.map(self._resolve, paths)))

    def _resolve(self, path: str) -> Resolution:
        try:
            descriptor = self.locator(path)
        except Exception as exc:  # noqa: BLE001 - any lookup failure skips the edge
            return f"{type(exc).__name__}: {exc}"
        if descriptor is None:
            return f"No package descriptor returned for {path}"
        return descriptor

    def _apply(self, edge: ModuleEdge, resolved: Dict[str, Resolution], result: BuildResult) -> None:
        requester = resolved[edge.requester]
        dependency = resolved[edge.dependency]
        for outcome in (requester, dependency):
            if isinstance(outcome, str):
                _LOG.info("Skipping %s -> %s: %s", edge.requester, edge.dependency, outcome)
                result.skip(edge, SkipReason.DESCRIPTOR_RESOLUTION, outcome)
                return

        refs = self._identities(requester, dependency)
        if refs is None:
            _LOG.debug("Skipping %s -> %s: package without a name", edge.requester, edge.dependency)
            result.skip(edge, SkipReason.UNREPRESENTABLE_IDENTITY)
            return
        requester_ref, dependency_ref = refs

        result.note(requester_ref, requester, edge.requester)
        result.note(dependency_ref, dependency, edge.dependency)
        result.registry.add(dependency_ref, dependency)
        if self.include_requesters:
            result.registry.add(requester_ref, requester)
        if requester_ref == dependency_ref:
            # files within one package: the package stays, the relation does not
            result.relations.ensure(dependency_ref)
            result.skip(edge, SkipReason.SELF_LOOP, requester_ref)
            return
        result.relations.link(requester_ref, dependency_ref)

    def _identities(
        self, requester: PackageDescriptor, dependency: PackageDescriptor
    ) -> Optional[Tuple[str, str]]:
        requester_ref = purl_of(requester, self.ecosystem)
        dependency_ref = purl_of(dependency, self.ecosystem)
        if requester_ref is None or dependency_ref is None:
            return None
        return requester_ref, dependency_ref
