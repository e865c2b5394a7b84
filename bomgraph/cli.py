"""Command-line interface for building a dependency graph from webpack stats."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import List

from bomgraph.core import assembly, config as config_loader, reporter
from bomgraph.core.errors import BomGraphError
from bomgraph.runners import webpack

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build an SBOM dependency graph from webpack stats")
    parser.add_argument("--stats", type=pathlib.Path, default=pathlib.Path("stats.json"), help="webpack stats JSON file")
    parser.add_argument("--config", type=pathlib.Path, default=pathlib.Path("config/bomgraph.yml"), help="Build configuration YAML file")
    parser.add_argument("--out", type=pathlib.Path, default=pathlib.Path("reports/summary.json"), help="Path for the summary JSON output")
    parser.add_argument("--format", action="append", choices=["json", "md"], help="Formats to emit (defaults to all)")
    parser.add_argument("--include-requesters", action="store_true", default=None, help="Also record requesting packages as components")
    parser.add_argument("--workers", type=int, default=None, help="Threads used to resolve package descriptors")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging verbosity")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        build_config = config_loader.load_config(args.config).with_overrides(
            include_requesters=args.include_requesters,
            workers=args.workers,
        )
        modules = webpack.load_stats(args.stats)
        edges = webpack.edges_from_modules(modules, build_config.ignored_prefixes)
        graph = assembly.resolve_components(edges, build_config)
    except (BomGraphError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    summary = reporter.build_summary(graph)
    formats = args.format or ["json", "md"]
    report_paths = reporter.write_reports(summary, output_dir=args.out.parent, json_path=args.out, formats=formats)

    print(
        f"Resolved {summary['total_components']} components and {summary['total_relations']} relations "
        f"JSON={report_paths.json_path or 'skipped'} "
        f"MD={report_paths.markdown_path or 'skipped'}"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
