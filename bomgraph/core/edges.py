"""Module edges fed to the builder and diagnostics for the ones it skips."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence

DEFAULT_IGNORED_PREFIXES = ("ignored", "external")


class SkipReason(str, Enum):
    """Why an edge contributed nothing to the graph."""

    MALFORMED_EDGE = "malformed-edge"
    DESCRIPTOR_RESOLUTION = "descriptor-resolution"
    UNREPRESENTABLE_IDENTITY = "unrepresentable-identity"
    SELF_LOOP = "self-loop"


@dataclass(frozen=True)
class ModuleEdge:
    """``requester`` required ``dependency``; both are module resource paths."""

    requester: Optional[str]
    dependency: Optional[str]

    def is_ignored(self, prefixes: Sequence[str] = DEFAULT_IGNORED_PREFIXES) -> bool:
        """Whether the edge should never reach the builder.

        Matching is a case-sensitive prefix test on the requester only.
        """

        if not self.requester or not self.dependency:
            return True
        return any(self.requester.startswith(prefix) for prefix in prefixes)


@dataclass(frozen=True)
class SkippedEdge:
    edge: ModuleEdge
    reason: SkipReason
    detail: str = ""

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "requester": self.edge.requester,
            "dependency": self.edge.dependency,
            "reason": self.reason.value,
        }
        if self.detail:
            payload["detail"] = self.detail
        return payload
