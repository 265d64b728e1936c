import re

from cpx_analyze.domain.models import SEVERITIES

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value: str | None) -> int:
    """
    Read the leading integer of ``value`` the lenient way tool output needs:
    ``"12"`` -> 12, ``" 7abc"`` -> 7, ``""`` / ``"n/a"`` / None -> 0.
    """
    if not value:
        return 0
    m = _LEADING_INT.match(value)
    return int(m.group(1)) if m else 0


def xml_attr(tag: str, name: str) -> str:
    """
    Literal value of ``name="..."`` inside ``tag``.

    No entity decoding: ``&amp;`` stays ``&amp;``. Returns "" when the
    attribute is missing or its closing quote never arrives.
    """
    m = re.search(rf'(?<![\w-]){re.escape(name)}="', tag)
    if not m:
        return ""
    start = m.end()
    end = tag.find('"', start)
    if end == -1:
        return ""
    return tag[start:end]


def xml_int(tag: str, name: str) -> int:
    return parse_int(xml_attr(tag, name))


def shared_severity(native: str) -> str:
    """Map a tool's native severity word onto error / warning / info."""
    s = (native or "").strip().lower()
    return s if s in SEVERITIES else "info"
