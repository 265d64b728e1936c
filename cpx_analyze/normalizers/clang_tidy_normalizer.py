from __future__ import annotations

import re
from dataclasses import dataclass

from cpx_analyze.domain.models import Finding
from cpx_analyze.domain.schemas import RawToolCapture
from .base import ToolNormalizer
from .util import parse_int

TOOL = "clang-tidy"

_TRAILING_RULE = re.compile(r"\s*\[([^\[\]]+)\]\s*$")


@dataclass
class DiagnosticLine:
    file: str
    line: int
    column: int
    severity: str
    message: str
    rule: str | None = None


def parse_line(text: str) -> DiagnosticLine | None:
    """
    Split ``file:line:column: severity: message [check-name]``.

    Returns None when the line has fewer than four colon-separated parts.
    Everything after the severity is the message, colons included.
    """
    parts = text.split(":", 4)
    if len(parts) < 4:
        return None

    message = parts[4].strip() if len(parts) > 4 else ""
    rule = None
    m = _TRAILING_RULE.search(message)
    if m:
        rule = m.group(1)
        message = message[: m.start()].strip()

    return DiagnosticLine(
        file=parts[0].strip(),
        line=parse_int(parts[1]),
        column=max(parse_int(parts[2]), 0),
        severity=parts[3].strip().lower(),
        message=message,
        rule=rule,
    )


@dataclass
class _Draft:
    severity: str
    file: str
    line: int
    column: int
    message: str
    rule: str | None

    def append(self, text: str, sep: str) -> None:
        self.message = f"{self.message}{sep}{text}" if self.message else text

    def freeze(self) -> Finding:
        return Finding(
            tool=TOOL,
            severity=self.severity,
            file=self.file,
            line=self.line,
            column=self.column,
            message=self.message,
            rule=self.rule,
        )


class DiagnosticGrouper:
    """
    Folds clang-tidy lines into Findings.

    Two states: idle (``draft is None``) and open. ``note:`` lines and bare
    text lines are continuations of the open warning/error; any other
    diagnostic closes it.
    """

    def __init__(self) -> None:
        self.draft: _Draft | None = None
        self.findings: list[Finding] = []

    @property
    def is_open(self) -> bool:
        return self.draft is not None

    def feed(self, text: str) -> None:
        text = text.strip()
        if not text:
            return

        diag = parse_line(text)
        if diag is None:
            if self.draft is not None and ":" not in text:
                self.draft.append(text, " ")
            return

        if diag.severity == "note":
            if self.draft is not None and diag.message:
                self.draft.append(diag.message, "; ")
            return

        if diag.severity in ("warning", "error") and diag.file and diag.line > 0:
            self.flush()
            self.draft = _Draft(
                severity=diag.severity,
                file=diag.file,
                line=diag.line,
                column=diag.column,
                message=diag.message,
                rule=diag.rule,
            )
            return

        self.flush()

    def flush(self) -> None:
        if self.draft is not None:
            self.findings.append(self.draft.freeze())
            self.draft = None


class ClangTidyNormalizer(ToolNormalizer):
    def tool_name(self) -> str:
        return TOOL

    def select_input(self, raw: RawToolCapture) -> str:
        # clang-tidy interleaves diagnostics across stdout and stderr
        return "\n".join(part for part in (raw.output, raw.diagnostics) if part)

    def parse(self, text: str) -> list[Finding]:
        grouper = DiagnosticGrouper()
        for line in (text or "").splitlines():
            grouper.feed(line)
        grouper.flush()
        return grouper.findings
