"""Command-line entry point: captured analyzer output in, HTML report out."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from cpx_analyze.core import containers
from cpx_analyze.core.config import settings
from cpx_analyze.core.logging import setup_logging
from cpx_analyze.domain.schemas import CaptureBundle
from cpx_analyze.services.analysis_service import AnalysisService
from cpx_analyze.services.report_service import ReportRenderError

logger = logging.getLogger(__name__)

SKIP_FLAGS = {
    "skip_cppcheck": "Cppcheck",
    "skip_lint": "clang-tidy",
    "skip_flawfinder": "Flawfinder",
}


def load_captures(path: str | Path) -> CaptureBundle:
    data = json.loads(Path(path).read_text(encoding="utf-8") or "[]")
    return CaptureBundle.model_validate(data)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cpx-analyze",
        description="Combine Cppcheck, clang-tidy and Flawfinder output into one HTML report.",
    )
    ap.add_argument("captures", help="JSON file with the captured output of each analyzer")
    ap.add_argument("--output", default=settings.REPORT_OUTPUT, help="HTML report path")
    ap.add_argument("--json", dest="json_output", default=None, help="also write the report model as JSON")
    ap.add_argument("--skip-cppcheck", action="store_true", help="Skip Cppcheck analysis")
    ap.add_argument("--skip-lint", action="store_true", help="Skip clang-tidy analysis")
    ap.add_argument("--skip-flawfinder", action="store_true", help="Skip Flawfinder analysis")
    ap.add_argument("--log-level", default=None)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or settings.LOG_LEVEL)

    try:
        bundle = load_captures(args.captures)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Could not load captures from %s: %s", args.captures, e)
        return 1

    skip = [tool for flag, tool in SKIP_FLAGS.items() if getattr(args, flag)]
    service = AnalysisService(
        containers.build_normalize_service(),
        containers.build_aggregate_service(),
        containers.build_report_service(),
    )

    try:
        analysis = service.run(bundle.captures, args.output, skip=skip, json_output=args.json_output)
    except (ReportRenderError, OSError) as e:
        logger.error("Report generation failed: %s", e)
        return 1

    print(f"Analysis complete! Report saved to: {args.output}")
    print(f"   Total findings: {analysis.summary.total_findings}")
    for tool, count in analysis.summary.by_tool.items():
        print(f"   {tool}: {count} findings")
    return 0


if __name__ == "__main__":
    sys.exit(main())
