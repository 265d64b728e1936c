from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from cpx_analyze.domain.models import ComprehensiveAnalysis, Summary, ToolResult

logger = logging.getLogger(__name__)


class AggregateService:
    """
    Combines per-tool results into one report model.

    Only ``success`` results are counted; ``error`` and ``skipped`` results
    stay in the tool list for display. Findings from different tools are
    never merged, even when they point at the same file and line.
    """

    def build(
        self,
        tool_results: Iterable[ToolResult],
        timestamp: datetime | None = None,
    ) -> ComprehensiveAnalysis:
        tools = list(tool_results)
        analysis = ComprehensiveAnalysis(
            timestamp=timestamp or datetime.now(timezone.utc),
            tools=tools,
            summary=self.summarize(tools),
        )
        logger.info(
            "Aggregated %d tools: %d findings",
            len(tools),
            analysis.summary.total_findings,
        )
        return analysis

    @staticmethod
    def summarize(tool_results: Iterable[ToolResult]) -> Summary:
        summary = Summary()
        for result in tool_results:
            if result.status != "success":
                continue
            summary.total_findings += result.count
            summary.by_tool[result.tool] = summary.by_tool.get(result.tool, 0) + result.count
            for f in result.findings:
                summary.by_severity[f.severity] = summary.by_severity.get(f.severity, 0) + 1
        return summary
