from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from cpx_analyze.domain.models import Finding, ToolResult
from cpx_analyze.domain.schemas import RawToolCapture

logger = logging.getLogger(__name__)


class ToolNormalizer(ABC):
    """
    Turns one analyzer's raw capture into a finalized ToolResult.

    Status is decided by the caller that ran the tool; only ``success``
    captures are parsed. Subclasses implement ``parse`` and may override
    ``select_input`` to pick which captured channel to read.
    """

    @abstractmethod
    def tool_name(self) -> str: ...

    @abstractmethod
    def parse(self, text: str) -> list[Finding]: ...

    def select_input(self, raw: RawToolCapture) -> str:
        return raw.output

    def normalize(self, raw: RawToolCapture) -> ToolResult:
        tool = self.tool_name()
        if raw.status != "success":
            return ToolResult(tool=tool, status=raw.status, error=raw.error or raw.status)

        findings = self.parse(self.select_input(raw))
        logger.debug("%s: %d findings", tool, len(findings), extra={"tool": tool})
        return ToolResult(tool=tool, status="success", findings=findings)
