"""Issue detector — per-role static scan of generated text. Zero LLM calls."""

import logging
import re
import threading
import uuid

from config.rules import GENERIC_RULES, ROLE_RULES
from core.state import DetectionResult, IssueReport

SEVERITIES = ("critical", "high", "medium", "low")

_ISOPEN_PROP_RE = re.compile(r"""isOpen=\{(\w+)\}""")
_RELATIVE_IMPORT_RE = re.compile(r"""^\s*import\b.*\bfrom\s+['"]\.\./""", re.MULTILINE)
_COMMENTED_CODE_RE = re.compile(r"""^\s*//.{40,}$""", re.MULTILINE)
_LABELED_BUTTON_RE = re.compile(r"""<button[^>]*>([^<]+)</button>""")


def _declared(text, name):
    return (
        f"const [{name}" in text
        or re.search(rf"""\b(?:let|var|const)\s+{re.escape(name)}\b""", text) is not None
    )


def _undeclared_state(text):
    """isOpen={x} where x is never declared."""
    findings = []
    seen = set()
    for match in _ISOPEN_PROP_RE.finditer(text):
        name = match.group(1)
        if name in seen or name in ("true", "false") or _declared(text, name):
            continue
        seen.add(name)
        setter = "set" + name[:1].upper() + name[1:]
        findings.append((
            "critical", "logic",
            f'Variable "{name}" is used but never declared',
            f"Add: const [{name}, {setter}] = useState(false)",
        ))
    return findings


def _deep_relative_imports(text):
    if len(_RELATIVE_IMPORT_RE.findall(text)) > 5:
        return [(
            "low", "structure",
            "Many parent-relative imports, the folder structure is probably too deep",
            "Use path aliases (@/components, @/utils) or flatten the structure",
        )]
    return []


def _commented_code(text):
    if len(_COMMENTED_CODE_RE.findall(text)) > 3:
        return [(
            "low", "structure",
            "Large blocks of commented-out code",
            "Delete dead code, version control keeps the history",
        )]
    return []


def _unlabeled_button(text):
    if "<button" in text and "aria-label" not in text and not _LABELED_BUTTON_RE.search(text):
        return [(
            "medium", "accessibility",
            "Button has neither visible text nor aria-label",
            "Add an aria-label or visible text to the button",
        )]
    return []


# Role id -> computed checks run after the rule table
_COMPUTED_CHECKS = {
    "architect": (_deep_relative_imports, _commented_code),
    "developer": (_undeclared_state,),
    "accessibility": (_unlabeled_button,),
}


def confidence_score(issues, text):
    """Advisory confidence in a detection run, 0..100."""
    if not issues:
        return 100

    confidence = 90
    if len(issues) > 10:
        confidence -= 20
    elif len(issues) > 5:
        confidence -= 10

    critical = sum(1 for i in issues if i.severity == "critical")
    if critical:
        confidence = min(100, confidence + critical * 5)

    if len(text) < 100:
        confidence -= 15

    return max(0, min(100, confidence))


def needs_escalation(issues):
    """Any critical or high finding, or more than three findings."""
    return any(i.severity in ("critical", "high") for i in issues) or len(issues) > 3


class IssueDetector:
    """Runs the scanner matching a role's domain and keeps a detection history."""

    name = "issue_detector"

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger(__name__)
        self._history = []
        self._lock = threading.Lock()

    def _scan(self, text, role_id):
        rules = ROLE_RULES.get(role_id, GENERIC_RULES)
        issues = []

        for pattern, absent, severity, category, description, fix, fix_from, fix_to in rules:
            if not pattern.search(text):
                continue
            if absent is not None and absent.search(text):
                continue
            issues.append(self._report(
                role_id, severity, category, description, fix,
                auto_fixable=fix_from is not None and fix_to is not None,
            ))

        for check in _COMPUTED_CHECKS.get(role_id, ()):
            for severity, category, description, fix in check(text):
                issues.append(self._report(role_id, severity, category, description, fix, False))

        return issues

    def _report(self, role_id, severity, category, description, fix, auto_fixable):
        return IssueReport(
            id=f"{role_id}-{uuid.uuid4().hex[:9]}",
            severity=severity,
            category=category,
            origin_role_id=role_id,
            description=description,
            suggested_fix=fix,
            auto_fixable=auto_fixable,
        )

    def detect(self, text, role_id) -> DetectionResult:
        text = text or ""
        issues = self._scan(text, role_id)
        escalate = needs_escalation(issues)

        if issues:
            self.logger.warning(
                "[%s] %d issue(s) detected%s", role_id, len(issues),
                ", escalating" if escalate else "",
            )
        else:
            self.logger.debug("[%s] no issues detected", role_id)

        with self._lock:
            self._history.extend(issues)

        return DetectionResult(
            issues=issues,
            needs_escalation=escalate,
            confidence=confidence_score(issues, text),
        )

    def history(self):
        with self._lock:
            return list(self._history)

    def clear_history(self):
        with self._lock:
            self._history = []

    def statistics(self):
        """Totals over the whole history, by severity and by category."""
        history = self.history()
        by_category = {}
        for issue in history:
            by_category[issue.category] = by_category.get(issue.category, 0) + 1
        return {
            "total": len(history),
            "by_severity": {s: sum(1 for i in history if i.severity == s) for s in SEVERITIES},
            "by_category": by_category,
            "auto_fixable": sum(1 for i in history if i.auto_fixable),
        }
