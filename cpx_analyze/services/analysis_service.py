from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from cpx_analyze.domain.models import ComprehensiveAnalysis
from cpx_analyze.domain.schemas import RawToolCapture
from cpx_analyze.services.aggregate_service import AggregateService
from cpx_analyze.services.normalize_service import NormalizeService
from cpx_analyze.services.report_service import ReportService

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Orchestrates: captured tool output → normalized results → aggregate → HTML report.
    """

    def __init__(
        self,
        normalize_service: NormalizeService,
        aggregate_service: AggregateService,
        report_service: ReportService,
    ):
        self.normalizer = normalize_service
        self.aggregator = aggregate_service
        self.reporter = report_service

    def run(
        self,
        captures: Iterable[RawToolCapture],
        output: str | Path,
        skip: Iterable[str] = (),
        json_output: str | Path | None = None,
    ) -> ComprehensiveAnalysis:
        # Phase 1: normalize each tool's raw output
        results = self.normalizer.run(captures, skip=skip)

        # Phase 2: counts across tools
        analysis = self.aggregator.build(results)

        # Phase 3: report (raises ReportRenderError, leaves no partial file)
        self.reporter.write(analysis, output)
        if json_output:
            self.reporter.write_json(analysis, json_output)

        logger.info("Analysis complete: %d findings", analysis.summary.total_findings)
        return analysis
