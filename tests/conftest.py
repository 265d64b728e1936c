import logging

import pytest

from cpx_analyze.core.config import settings
from cpx_analyze.domain.schemas import RawToolCapture


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    """Keep environment overrides from leaking into report rendering."""
    monkeypatch.setattr(settings, "REPORT_TEMPLATE", None)
    monkeypatch.setattr(settings, "REPORT_TITLE", "Cpx Code Analysis Report")


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() replaces root handlers; put the originals back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


CPPCHECK_XML = """<?xml version="1.0" encoding="UTF-8"?>
<results version="2">
    <cppcheck version="2.13.0"/>
    <errors>
        <error id="nullPointer" severity="error" msg="Null pointer dereference: p" verbose="Null pointer dereference: p" cwe="476" file0="src/main.c">
            <location file="src/main.c" line="12" column="5" info="Null pointer dereference"/>
            <location file="src/main.c" line="10" column="9" info="Assignment &apos;p=NULL&apos;"/>
            <symbol>p</symbol>
        </error>
        <error id="unusedFunction" severity="style" msg="The function &apos;helper&apos; is never used." verbose="The function &apos;helper&apos; is never used." cwe="561">
            <location file="src/util.c" line="3" column="0"/>
        </error>
    </errors>
</results>
"""

CLANG_TIDY_OUTPUT = """\
src/main.cpp:10:5: warning: unused variable 'x' [clang-diagnostic-unused-variable]
src/main.cpp:8:3: note: 'x' declared here
src/main.cpp:22:3: error: use of undeclared identifier 'foo' [clang-diagnostic-error]
"""

FLAWFINDER_CSV = """\
File,Line,Column,DefaultLevel,Level,Category,Name,Warning,Suggestion,Note,CWEs,Context,Fingerprint,ToolVersion,RuleId,HelpUri
src/a.c,10,2,3,2,"buffer",strcpy,"Does not check for buffer overflows","Use strncpy","",CWE-120,"  strcpy(dst, src);",abc,2.0.19,FF1001,https://example.invalid/FF1001
src/b.c,4,7,4,4,"format",printf,"If format strings can be influenced by an attacker, they can be exploited","Use a constant for the format specification","",CWE-134,"printf(fmt);",def,2.0.19,FF1016,https://example.invalid/FF1016
"""


@pytest.fixture
def captures() -> list[RawToolCapture]:
    return [
        RawToolCapture(tool="Cppcheck", output=CPPCHECK_XML),
        RawToolCapture(tool="clang-tidy", output=CLANG_TIDY_OUTPUT),
        RawToolCapture(tool="Flawfinder", output=FLAWFINDER_CSV),
    ]
