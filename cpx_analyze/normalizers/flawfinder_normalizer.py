from __future__ import annotations

import csv

from cpx_analyze.domain.models import Finding
from .base import ToolNormalizer
from .util import parse_int

TOOL = "Flawfinder"

# File,Line,Column,DefaultLevel,Level,Category,Name,Warning,Suggestion,Note,CWEs,...
_MIN_FIELDS = 7


class FlawfinderNormalizer(ToolNormalizer):
    def tool_name(self) -> str:
        return TOOL

    def parse(self, text: str) -> list[Finding]:
        out: list[Finding] = []
        for line in (text or "").splitlines():
            line = line.strip()
            if not line or line.startswith("File,"):
                continue

            # one record per line: an unbalanced quote must not swallow the next row
            try:
                row = next(csv.reader([line]))
            except (csv.Error, StopIteration):
                continue
            if len(row) < _MIN_FIELDS:
                continue

            finding = _row_to_finding(row)
            if finding:
                out.append(finding)
        return out


def _row_to_finding(row: list[str]) -> Finding | None:
    file = row[0].strip()
    line = parse_int(row[1])
    if not file or line <= 0:
        return None

    # Level (column 4) is the context-adjusted risk; DefaultLevel (3) is ignored
    level = parse_int(row[4])
    category = row[5]
    name = row[6]
    warning = row[7] if len(row) > 7 else ""
    suggestion = row[8] if len(row) > 8 else ""

    message = warning
    if suggestion:
        message = f"{warning}. {suggestion}" if warning else suggestion

    return Finding(
        tool=TOOL,
        severity=severity_for_level(level),
        file=file,
        line=line,
        column=max(parse_int(row[2]), 0),
        message=message,
        rule=(f"{category}: {name}" if category else name) or None,
    )


def severity_for_level(level: int) -> str:
    if level >= 4:
        return "error"
    if level >= 2:
        return "warning"
    return "info"
