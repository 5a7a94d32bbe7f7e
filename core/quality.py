"""Artifact shape checks. Advisory: a failing report never blocks delivery."""

import re

from core.state import ValidationReport

_SELF_CLOSING = {"br", "hr", "img", "input", "meta", "link", "source", "area", "col", "wbr"}
_OPEN_TAG_RE = re.compile(r"<(?!/)([a-zA-Z][\w-]*)(?:\s[^>]*)?(?<!/)>")
_CLOSE_TAG_RE = re.compile(r"</([a-zA-Z][\w-]*)>")
_INLINE_STYLE_RE = re.compile(r"""style\s*=\s*\"""")


def validate_html(code):
    errors, warnings = [], []
    if not code or not code.strip():
        return ValidationReport(is_valid=False, errors=["Generated document is empty"])

    lowered = code.lower()
    for tag in ("html", "head", "body"):
        if f"<{tag}" not in lowered:
            warnings.append(f"No <{tag}> tag found")

    opened = {}
    for name in _OPEN_TAG_RE.findall(code):
        name = name.lower()
        if name not in _SELF_CLOSING:
            opened[name] = opened.get(name, 0) + 1
    closed = {}
    for name in _CLOSE_TAG_RE.findall(code):
        name = name.lower()
        closed[name] = closed.get(name, 0) + 1
    unclosed = sorted(n for n, count in opened.items() if count > closed.get(n, 0))
    if unclosed:
        warnings.append(f"Possibly unclosed tags: {', '.join(unclosed)}")

    if "<script>alert" in code or "javascript:" in lowered:
        warnings.append("Potentially dangerous JavaScript found")

    inline = len(_INLINE_STYLE_RE.findall(code))
    if inline > 10:
        warnings.append(f"Many inline styles ({inline}), prefer CSS classes")

    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


def validate_css(code):
    errors, warnings = [], []
    if not code or not code.strip():
        return ValidationReport(is_valid=True)

    opening, closing = code.count("{"), code.count("}")
    if opening != closing:
        errors.append(f"Unbalanced braces: {opening} opening, {closing} closing")
    if ";;" in code:
        warnings.append("Double semicolons found")

    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


def validate_javascript(code):
    errors, warnings = [], []
    if not code or not code.strip():
        return ValidationReport(is_valid=True)

    for opening, closing, label in (("{", "}", "braces"), ("[", "]", "brackets"), ("(", ")", "parentheses")):
        o, c = code.count(opening), code.count(closing)
        if o != c:
            errors.append(f"Unbalanced {label}: {o} opening, {c} closing")

    if "eval(" in code:
        warnings.append("eval() used")
    if "innerHTML" in code and "textContent" not in code:
        warnings.append("innerHTML used, prefer textContent to avoid XSS")

    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


_VALIDATORS = {
    "html": validate_html,
    "css": validate_css,
    "javascript": validate_javascript,
    "typescript": validate_javascript,
}


def _prefixed(report, prefix):
    return [f"{prefix}: {e}" for e in report.errors], [f"{prefix}: {w}" for w in report.warnings]


def validate_artifact(artifact) -> ValidationReport:
    """Check a SingleDocument or MultiFileProject and return an advisory report."""
    if artifact.kind == "single":
        return validate_html(artifact.content)

    errors, warnings = [], []
    paths = {f.path for f in artifact.files}
    if artifact.entry_file and artifact.entry_file not in paths:
        warnings.append(f"Entry file {artifact.entry_file} is not part of the project")
    if artifact.salvaged:
        warnings.append("Project was salvaged from an unparseable response, review every file")

    for entry in artifact.files:
        validator = _VALIDATORS.get(entry.language)
        if validator is None:
            continue
        report = validator(entry.content)
        errs, warns = _prefixed(report, entry.path)
        errors.extend(errs)
        warnings.extend(warns)

    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


def validation_report_text(report):
    if report.is_valid and not report.warnings:
        return "Code valid - no problems found"

    lines = []
    if not report.is_valid:
        lines.append("Errors:")
        lines.extend(f"{i}. {e}" for i, e in enumerate(report.errors, 1))
        lines.append("")
    if report.warnings:
        lines.append("Warnings:")
        lines.extend(f"{i}. {w}" for i, w in enumerate(report.warnings, 1))
    return "\n".join(lines)
