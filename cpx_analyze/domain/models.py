from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from hashlib import sha1
from typing import Any, Literal

Severity = Literal["error", "warning", "info"]
ToolStatus = Literal["success", "error", "skipped"]

SEVERITIES: tuple[str, ...] = ("error", "warning", "info")


@dataclass(frozen=True)
class Finding:
    tool: str
    severity: Severity
    file: str
    line: int
    message: str
    column: int = 0
    rule: str | None = None
    end_line: int | None = None
    end_column: int | None = None

    @property
    def id(self) -> str:
        base = f"{self.tool}|{self.severity}|{self.file}|{self.line}|{self.column}|{self.rule}|{self.message}"
        return sha1(base.encode("utf-8")).hexdigest()

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "tool": self.tool,
            "severity": self.severity,
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "message": self.message,
        }
        # optional fields are omitted when unset
        if self.rule:
            d["rule"] = self.rule
        if self.end_line:
            d["end_line"] = self.end_line
        if self.end_column:
            d["end_column"] = self.end_column
        return d


@dataclass
class ToolResult:
    tool: str
    status: ToolStatus
    findings: list[Finding] = field(default_factory=list)
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.findings)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "tool": self.tool,
            "status": self.status,
            "results": [f.to_dict() for f in self.findings],
        }
        if self.error:
            d["error"] = self.error
        return d


@dataclass
class Summary:
    total_findings: int = 0
    by_severity: dict[str, int] = field(default_factory=dict)
    by_tool: dict[str, int] = field(default_factory=dict)


@dataclass
class ComprehensiveAnalysis:
    timestamp: datetime
    tools: list[ToolResult]
    summary: Summary

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "tools": [t.to_dict() for t in self.tools],
            "summary": {
                "total_findings": self.summary.total_findings,
                "by_severity": dict(self.summary.by_severity),
                "by_tool": dict(self.summary.by_tool),
            },
        }
