"""Tests for agents.patch_composer — auto-fix application."""

from agents.issue_detector import IssueDetector
from agents.patch_composer import PatchComposer
from core.collaboration import CollaborationLog


def _detect(text, role_id):
    return IssueDetector().detect(text, role_id).issues


def test_name_typo_fixed():
    text = '<div Name="p-4"><span Name="x">hi</span></div>'
    patched, fixed = PatchComposer().apply(text, _detect(text, "designer"), role_id="designer")
    assert patched == '<div className="p-4"><span className="x">hi</span></div>'
    assert len(fixed) == 1


def test_missing_import_prepended():
    text = "const [a, setA] = useState(0)\n"
    patched, fixed = PatchComposer().apply(text, _detect(text, "developer"), role_id="developer")
    assert patched.startswith("import { useState } from 'react'\n")
    assert patched.count("import { useState }") == 1
    assert len(fixed) == 1


def test_http_src_upgraded():
    text = '<script src="http://cdn.example.com/lib.js"></script>'
    patched, _ = PatchComposer().apply(text, _detect(text, "security"), role_id="security")
    assert patched == '<script src="https://cdn.example.com/lib.js"></script>'


def test_console_log_lines_removed():
    text = "const a = 1;\nconsole.log(a);\nexport default a;\n"
    patched, fixed = PatchComposer().apply(text, _detect(text, "documenter"), role_id="documenter")
    assert patched == "const a = 1;\nexport default a;\n"
    assert len(fixed) == 1


def test_non_fixable_findings_left_alone():
    text = "eval(userInput)"
    issues = _detect(text, "security")
    patched, fixed = PatchComposer().apply(text, issues, role_id="security")
    assert patched == text
    assert fixed == []


def test_patches_recorded_in_session():
    text = '<img src="a.png">'
    issues = _detect(text, "accessibility")
    log = CollaborationLog()
    session = log.start_session(issues[0], "architect", ["accessibility"])

    patched, fixed = PatchComposer(collaboration=log).apply(text, issues, session, "accessibility")

    assert patched == '<img alt="" src="a.png">'
    proposals = [m for m in log.get(session.id).messages if m.kind == "patch-proposal"]
    assert len(proposals) == 1
    assert proposals[0].before == '<img src="a.png">'
    assert proposals[0].after == '<img alt="" src="a.png">'
    assert proposals[0].sender == "accessibility"


def test_no_issues():
    assert PatchComposer().apply("text", []) == ("text", [])
