"""Render a built graph as a JSON or Markdown summary."""

from __future__ import annotations

import datetime as dt
import json
import pathlib
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from bomgraph.core.edges import SkipReason
from bomgraph.core.graph import Graph


@dataclass
class ReportPaths:
    json_path: pathlib.Path | None
    markdown_path: pathlib.Path | None


def build_summary(graph: Graph) -> Dict[str, Any]:
    reasons = Counter(skipped.reason for skipped in graph.skipped)
    relations = sorted(graph.relations)
    return {
        "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(),
        "metadata": graph.metadata.to_dict(),
        "total_components": len(graph.components),
        "total_relations": len(relations),
        "components": [component.to_dict() for component in graph.components],
        "dependencies": [
            {"ref": bom_ref, "dependsOn": list(targets)} for bom_ref, targets in graph.dependencies.items()
        ],
        "roots": list(graph.roots),
        "skipped": {reason.value: reasons.get(reason, 0) for reason in SkipReason},
    }


def write_reports(
    summary: Dict[str, Any],
    output_dir: pathlib.Path,
    json_path: pathlib.Path | None = None,
    formats: Sequence[str] | None = None,
) -> ReportPaths:
    output_dir.mkdir(parents=True, exist_ok=True)
    formats = [fmt.lower() for fmt in (formats or ["json", "md"])]

    resolved_json = json_path or (output_dir / "summary.json")
    resolved_markdown = output_dir / "summary.md" if "md" in formats else None

    if "json" in formats:
        resolved_json.parent.mkdir(parents=True, exist_ok=True)
        resolved_json.write_text(json.dumps(summary, indent=2))
    else:
        resolved_json = None

    if resolved_markdown:
        resolved_markdown.write_text(render_markdown(summary))

    return ReportPaths(json_path=resolved_json, markdown_path=resolved_markdown)


def render_markdown(summary: Dict[str, Any]) -> str:
    lines: List[str] = ["# Dependency Graph Summary", ""]
    lines.append(f"Generated: {summary['generated_at']}")
    for tool in summary.get("metadata", {}).get("tools", []):
        lines.append(f"Tool: {tool['vendor']} {tool['name']} {tool['version']}")
    lines.append("")
    lines.append("## Counts")
    lines.append(f"- Components: {summary.get('total_components', 0)}")
    lines.append(f"- Relations: {summary.get('total_relations', 0)}")
    for reason, count in summary.get("skipped", {}).items():
        lines.append(f"- Skipped ({reason}): {count}")
    lines.append("")
    if summary.get("roots"):
        lines.append("## Roots")
        for root in summary["roots"]:
            lines.append(f"- {root}")
        lines.append("")
    if summary.get("components"):
        lines.append("## Components")
        for component in summary["components"]:
            lines.append(f"- {component['bom-ref']}")
        lines.append("")
    if summary.get("dependencies"):
        lines.append("## Dependencies")
        for entry in summary["dependencies"]:
            targets = ", ".join(entry["dependsOn"]) or "(none)"
            lines.append(f"- {entry['ref']} -> {targets}")
    return "\n".join(lines)
