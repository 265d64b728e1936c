from cpx_analyze.domain.schemas import RawToolCapture
from cpx_analyze.normalizers.clang_tidy_normalizer import (
    ClangTidyNormalizer,
    DiagnosticGrouper,
    parse_line,
)

from conftest import CLANG_TIDY_OUTPUT


def _parse(text: str):
    return ClangTidyNormalizer().parse(text)


def test_parses_warning_and_error_with_rules():
    findings = _parse(CLANG_TIDY_OUTPUT)

    assert len(findings) == 2
    w, e = findings
    assert (w.file, w.line, w.column, w.severity) == ("src/main.cpp", 10, 5, "warning")
    assert w.rule == "clang-diagnostic-unused-variable"
    assert w.message == "unused variable 'x'; 'x' declared here"
    assert (e.severity, e.line, e.rule) == ("error", 22, "clang-diagnostic-error")
    assert e.message == "use of undeclared identifier 'foo'"


def test_notes_fold_into_open_finding_in_order():
    text = (
        "a.cpp:1:1: warning: first [check-a]\n"
        "a.cpp:2:1: note: note one\n"
        "a.cpp:3:1: note: note two\n"
        "b.cpp:4:2: warning: second [check-b]\n"
    )
    findings = _parse(text)

    assert len(findings) == 2
    assert findings[0].message == "first; note one; note two"
    assert findings[0].rule == "check-a"
    assert findings[1].message == "second"


def test_note_without_open_finding_is_ignored():
    assert _parse("a.cpp:2:1: note: orphan note\n") == []


def test_text_without_colon_continues_message():
    text = "a.cpp:1:1: warning: first part\n   second part   \n"
    (f,) = _parse(text)
    assert f.message == "first part second part"


def test_source_snippet_lines_are_continuations():
    text = (
        "src/main.cpp:10:5: warning: unused variable 'x' [clang-diagnostic-unused-variable]\n"
        "   10 |     int x = 5;\n"
        "      |         ^\n"
    )
    (f,) = _parse(text)
    assert f.message == "unused variable 'x' 10 |     int x = 5; |         ^"
    assert f.rule == "clang-diagnostic-unused-variable"


def test_short_line_with_colon_is_ignored_without_closing():
    text = (
        "a.cpp:1:1: warning: kept open\n"
        "Error while processing: a.cpp\n"
        "a.cpp:2:1: note: still attached\n"
    )
    (f,) = _parse(text)
    assert f.message == "kept open; still attached"


def test_other_severity_closes_open_finding():
    text = (
        "a.cpp:1:1: warning: first\n"
        "a.cpp:2:1: remark: unrelated\n"
        "a.cpp:3:1: note: dropped note\n"
    )
    (f,) = _parse(text)
    assert f.message == "first"


def test_warning_without_line_number_closes_and_is_dropped():
    text = "a.cpp:1:1: warning: first\nfoo:bar:baz: warning: bad\n"
    (f,) = _parse(text)
    assert f.message == "first"


def test_message_keeps_colons():
    (f,) = _parse("a.cpp:5:7: error: expected ';' after expression: got '}'\n")
    assert f.message == "expected ';' after expression: got '}'"
    assert f.rule is None


def test_parse_line_shapes():
    d = parse_line("x.cc:12:3: Warning: msg [r-1]")
    assert (d.file, d.line, d.column, d.severity, d.message, d.rule) == ("x.cc", 12, 3, "warning", "msg", "r-1")
    assert parse_line("x.cc:12: only three") is None


def test_grouper_states():
    g = DiagnosticGrouper()
    assert not g.is_open
    g.feed("a.cpp:1:1: warning: w")
    assert g.is_open
    g.feed("a.cpp:1:1: note: n")
    assert g.is_open
    g.flush()
    assert not g.is_open
    assert [f.message for f in g.findings] == ["w; n"]


def test_normalize_combines_both_channels():
    raw = RawToolCapture(
        tool="clang-tidy",
        output="a.cpp:1:1: warning: from stdout [c1]",
        diagnostics="b.cpp:2:2: error: from stderr [c2]",
    )
    result = ClangTidyNormalizer().normalize(raw)
    assert [f.file for f in result.findings] == ["a.cpp", "b.cpp"]
