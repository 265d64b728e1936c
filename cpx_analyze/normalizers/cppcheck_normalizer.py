from __future__ import annotations

import re

from cpx_analyze.domain.models import Finding
from cpx_analyze.domain.schemas import RawToolCapture
from .base import ToolNormalizer
from .util import shared_severity, xml_attr, xml_int

TOOL = "Cppcheck"

# "<error" must not match "<errors>"
_ERROR_OPEN = re.compile(r"<error(?=[\s>/])")
_LOCATION_OPEN = re.compile(r"<location(?=[\s>/])")
_ERROR_CLOSE = "</error>"
_XML_MARKERS = ("<?xml", "<results>", "<error")


class CppcheckNormalizer(ToolNormalizer):
    """
    Cppcheck ``--xml --xml-version=2`` output.

    This is a tolerant text scan, not an XML parser: the XML may be a
    fragment recovered from stderr. Each ``<error>`` yields one Finding per
    ``<location>``; attribute values are kept literally (no entity decoding).
    """

    def tool_name(self) -> str:
        return TOOL

    def select_input(self, raw: RawToolCapture) -> str:
        return xml_payload(raw.output, raw.diagnostics)

    def parse(self, text: str) -> list[Finding]:
        out: list[Finding] = []
        pos = 0
        while True:
            m = _ERROR_OPEN.search(text, pos)
            if not m:
                break

            head_end = _tag_end(text, m.end())
            if head_end == -1:
                # stray quote in the opening tag: fall back to the first plain ">"
                head_end = text.find(">", m.end()) + 1
                if head_end == 0:
                    break
            head = text[m.start():head_end]

            if head.endswith("/>"):
                body_end = head_end
            else:
                close = text.find(_ERROR_CLOSE, head_end)
                if close == -1:
                    # unterminated <error>: ignore it
                    pos = head_end
                    continue
                body_end = close

            out.extend(_error_findings(head, text[head_end:body_end]))
            pos = body_end
        return out


def _error_findings(head: str, body: str) -> list[Finding]:
    severity = shared_severity(xml_attr(head, "severity"))
    msg = xml_attr(head, "msg") or xml_attr(head, "verbose")
    rule = xml_attr(head, "id") or None
    file0 = xml_attr(head, "file0")

    out: list[Finding] = []
    for loc in _location_tags(body):
        file = xml_attr(loc, "file") or file0
        line = xml_int(loc, "line")
        if not file or line <= 0:
            continue
        out.append(
            Finding(
                tool=TOOL,
                severity=severity,
                file=file,
                line=line,
                column=max(xml_int(loc, "column"), 0),
                message=msg,
                rule=rule,
            )
        )

    if not out and file0:
        line = xml_int(head, "line")
        if line > 0:
            out.append(Finding(tool=TOOL, severity=severity, file=file0, line=line, message=msg, rule=rule))
    return out


def _location_tags(body: str) -> list[str]:
    tags = []
    pos = 0
    while True:
        m = _LOCATION_OPEN.search(body, pos)
        if not m:
            return tags
        end = _tag_end(body, m.end())
        if end == -1:
            return tags
        tags.append(body[m.start():end])
        pos = end


def _tag_end(text: str, start: int) -> int:
    """Index just past the ``>`` closing the tag opened before ``start``, skipping quoted values."""
    quote = None
    for i in range(start, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == ">":
            return i + 1
    return -1


def xml_payload(primary: str, diagnostics: str) -> str:
    """
    Pick the text to feed the normalizer.

    Cppcheck sometimes leaves its ``--output-file`` empty and writes the XML
    to stderr instead. When ``primary`` is blank, return ``diagnostics``
    from the first XML marker on, cut after the last ``</results>``.
    """
    if primary and primary.strip():
        return primary
    if not diagnostics:
        return ""

    start = -1
    for marker in _XML_MARKERS:
        start = diagnostics.find(marker)
        if start >= 0:
            break
    if start < 0:
        return ""

    payload = diagnostics[start:]
    end = payload.rfind("</results>")
    if end > 0:
        payload = payload[: end + len("</results>")]
    return payload
