from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

import jinja2

from cpx_analyze.core.config import settings
from cpx_analyze.domain.models import SEVERITIES, ComprehensiveAnalysis

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_TEMPLATE = "report.html.j2"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ReportRenderError(RuntimeError):
    """The HTML report could not be rendered; nothing was written."""


class ReportService:
    """
    Renders a ComprehensiveAnalysis into one self-contained HTML page.

    Styling and the tab script are inlined by the template; the page
    references no external assets. Output is fully rendered in memory
    before anything touches the target path.
    """

    def __init__(self, template_path: str | Path | None = None, title: str | None = None):
        self.template_path = template_path if template_path is not None else settings.REPORT_TEMPLATE
        self.title = title or settings.REPORT_TITLE
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=True,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, analysis: ComprehensiveAnalysis) -> str:
        try:
            template = self._template()
            return template.render(**self._context(analysis))
        except Exception as e:
            logger.error("Report rendering failed: %s", e)
            raise ReportRenderError(f"failed to render report: {e}") from e

    def write(self, analysis: ComprehensiveAnalysis, path: str | Path) -> Path:
        html = self.render(analysis)
        target = Path(path)
        _atomic_write(target, html)
        logger.info("Report written to %s", target)
        return target

    def write_json(self, analysis: ComprehensiveAnalysis, path: str | Path) -> Path:
        target = Path(path)
        _atomic_write(target, json.dumps(analysis.to_dict(), indent=2))
        logger.info("JSON report written to %s", target)
        return target

    def _template(self) -> jinja2.Template:
        if self.template_path:
            text = Path(self.template_path).read_text(encoding="utf-8")
            return self._env.from_string(text)
        return self._env.get_template(DEFAULT_TEMPLATE)

    def _context(self, analysis: ComprehensiveAnalysis) -> dict:
        by_severity = analysis.summary.by_severity
        # fixed order; only severities that were actually seen
        severities = [(sev, by_severity[sev]) for sev in SEVERITIES if sev in by_severity]
        return {
            "title": self.title,
            "generated": analysis.timestamp.strftime(TIMESTAMP_FORMAT),
            "total_findings": analysis.summary.total_findings,
            "severities": severities,
            "tools": analysis.tools,
        }


def _atomic_write(target: Path, text: str) -> None:
    """Write ``text`` to a sibling temp file, then rename it over ``target``."""
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=str(target.parent),
        prefix=f".{target.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp:
            tmp.write(text)
        os.replace(tmp.name, target)
    except BaseException:
        Path(tmp.name).unlink(missing_ok=True)
        raise
