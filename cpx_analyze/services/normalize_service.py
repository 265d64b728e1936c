import logging
from typing import Iterable

from cpx_analyze.domain.models import ToolResult
from cpx_analyze.domain.schemas import RawToolCapture
from cpx_analyze.normalizers.registry import NormalizerRegistry

logger = logging.getLogger(__name__)


class NormalizeService:
    def __init__(self, registry: NormalizerRegistry):
        self.registry = registry

    def run(self, captures: Iterable[RawToolCapture], skip: Iterable[str] = ()) -> list[ToolResult]:
        """Normalize captures in the order given; ``skip`` names tools to mark as skipped."""
        skipped = {s.lower() for s in skip}
        results: list[ToolResult] = []

        for raw in captures:
            normalizer = self.registry.by_tool(raw.tool)
            if normalizer is None:
                logger.warning("No normalizer for tool %s", raw.tool, extra={"tool": raw.tool})
                results.append(ToolResult(
                    tool=raw.tool,
                    status="error",
                    error=f"no normalizer registered for tool '{raw.tool}' (known: {', '.join(self.registry.names())})",
                ))
                continue

            name = normalizer.tool_name()
            if name.lower() in skipped:
                results.append(ToolResult(tool=name, status="skipped", error="skipped by request"))
                continue

            result = normalizer.normalize(raw)
            logger.info(
                "Normalized %s: status=%s findings=%d",
                name,
                result.status,
                result.count,
                extra={"tool": name},
            )
            results.append(result)

        return results
