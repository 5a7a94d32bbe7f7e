"""Issue-scanner rule tables, one list per role domain.

Each entry:
(pattern, absent_pattern, severity, category, description, suggested_fix, auto_fix_from, auto_fix_to)

A rule fires when `pattern` matches and `absent_pattern` (if set) does not.
auto_fix_from/auto_fix_to: if both are set, the finding can be fixed by regex
substitution. Set both to None for findings that need a human or another role.
"""

import re

STRUCTURE_RULES = [
    (
        re.compile(r"""\bimport\s+React\s+from\b"""),
        re.compile(r"""\bexport\b"""),
        "medium", "structure",
        "Component imports React but exports nothing",
        "Add `export default` or `export const` for the component",
        None, None,
    ),
    (
        re.compile(r"""\bmodule\.exports\b.*\bexport\s+default\b""", re.DOTALL),
        None,
        "medium", "structure",
        "CommonJS and ES module exports mixed in the same file",
        "Use ES module syntax (`export`) consistently",
        None, None,
    ),
]

VISUAL_RULES = [
    (
        re.compile(r"""(?<![\w-])Name="""),
        None,
        "critical", "syntax",
        'Typo: "Name=" instead of "className="',
        'Replace "Name=" with "className="',
        re.compile(r"""(?<![\w-])Name="""),
        "className=",
    ),
    (
        re.compile(r"""text-gray-400.*bg-gray-300|bg-gray-300.*text-gray-400""", re.DOTALL),
        None,
        "medium", "ui",
        "Colour contrast is probably insufficient (text-gray-400 on bg-gray-300)",
        "Use text-gray-900 on bg-gray-300",
        re.compile(r"""\btext-gray-400\b"""),
        "text-gray-900",
    ),
    (
        re.compile(r"""\bstyle\s*=\s*["'][^"']*!important"""),
        None,
        "low", "ui",
        "Inline style forces !important",
        "Move the rule into a utility class or stylesheet",
        None, None,
    ),
]

LOGIC_RULES = [
    (
        re.compile(r"""\buseState\b"""),
        re.compile(r"""import\s*\{[^}]*\buseState\b[^}]*\}\s*from\s*['"]react['"]|\bReact\.useState\b"""),
        "critical", "logic",
        "useState is used but never imported",
        "Add: import { useState } from 'react'",
        re.compile(r"""\A"""),
        "import { useState } from 'react'\n",
    ),
    (
        re.compile(r"""\buseEffect\b"""),
        re.compile(r"""import\s*\{[^}]*\buseEffect\b[^}]*\}\s*from\s*['"]react['"]|\bReact\.useEffect\b"""),
        "critical", "logic",
        "useEffect is used but never imported",
        "Add: import { useEffect } from 'react'",
        re.compile(r"""\A"""),
        "import { useEffect } from 'react'\n",
    ),
    (
        re.compile(r"""\bawait\s+fetch\s*\("""),
        re.compile(r"""\bcatch\b"""),
        "medium", "logic",
        "Network call without any error handling",
        "Wrap the fetch in try/catch and surface the failure to the user",
        None, None,
    ),
]

SECURITY_RULES = [
    (
        re.compile(r"""api[_-]?key\s*[:=]\s*['"][a-zA-Z0-9_\-]{20,}['"]""", re.IGNORECASE),
        None,
        "critical", "security",
        "API key potentially exposed in source",
        "Read it from an environment variable (.env) instead",
        None, None,
    ),
    (
        re.compile(r"""(?:password|secret|token)\s*[:=]\s*["'][^"'\s]{6,}["']""", re.IGNORECASE),
        None,
        "critical", "security",
        "Hardcoded secret or credential",
        "Read credentials from environment variables",
        None, None,
    ),
    (
        re.compile(r"""\bdangerouslySetInnerHTML\b"""),
        None,
        "high", "security",
        "dangerouslySetInnerHTML used (XSS risk)",
        "Sanitise the HTML with DOMPurify before rendering",
        None, None,
    ),
    (
        re.compile(r"""\beval\s*\("""),
        None,
        "high", "security",
        "Use of eval() is unsafe",
        "Replace eval() with JSON.parse or explicit function calls",
        None, None,
    ),
    (
        re.compile(r"""javascript\s*:""", re.IGNORECASE),
        None,
        "high", "security",
        "javascript: URI is a common XSS vector",
        "Use event listeners instead of javascript: URIs",
        None, None,
    ),
    (
        re.compile(r"""src\s*=\s*["']http://""", re.IGNORECASE),
        None,
        "high", "security",
        "External resource loaded over HTTP (not HTTPS)",
        "Use HTTPS for all external scripts, stylesheets and images",
        re.compile(r"""(src\s*=\s*["'])http://""", re.IGNORECASE),
        r"\g<1>https://",
    ),
    (
        re.compile(r"""\.innerHTML\s*="""),
        re.compile(r"""\bDOMPurify\b"""),
        "medium", "security",
        "innerHTML assignment without sanitisation",
        "Use textContent, or sanitise with DOMPurify",
        None, None,
    ),
]

PERFORMANCE_RULES = [
    (
        re.compile(r"""useEffect\(\s*\(\)\s*=>\s*\{"""),
        re.compile(r"""\}\s*,\s*\["""),
        "medium", "performance",
        "useEffect without a dependency array (re-runs on every render)",
        "Pass a dependency array to useEffect",
        None, None,
    ),
    (
        re.compile(r"""\bimport\s+\*\s+as\b|\bimport\s+(?:lodash|_)\s+from\s+['"]lodash['"]"""),
        None,
        "low", "performance",
        "Whole-library import increases bundle size",
        'Use named imports: import { fn } from "lib"',
        None, None,
    ),
]

TESTING_RULES = [
    (
        re.compile(r"""\bexport\s+default\b"""),
        re.compile(r"""\b(?:test|it|describe)\s*\("""),
        "low", "testing",
        "Component shipped without unit tests",
        "Add a .test.tsx file covering the component",
        None, None,
    ),
]

ACCESSIBILITY_RULES = [
    (
        re.compile(r"""<img\b(?![^>]*\balt\s*=)[^>]*>""", re.IGNORECASE),
        None,
        "high", "accessibility",
        "Image without alt attribute",
        'Add alt="<description of the image>"',
        re.compile(r"""<img\b(?![^>]*\balt\s*=)""", re.IGNORECASE),
        '<img alt=""',
    ),
    (
        re.compile(r"""<html\b(?![^>]*\blang\s*=)[^>]*>""", re.IGNORECASE),
        None,
        "medium", "accessibility",
        "Document has no lang attribute",
        'Add lang="en" (or the content language) to <html>',
        re.compile(r"""<html\b(?![^>]*\blang\s*=)""", re.IGNORECASE),
        '<html lang="en"',
    ),
]

GENERIC_RULES = [
    (
        re.compile(r"""\bconsole\.log\s*\("""),
        None,
        "low", "logic",
        "console.log left in the code",
        "Use a logger or remove the statement",
        re.compile(r"""^[ \t]*console\.log\(.*\);?[ \t]*\n?""", re.MULTILINE),
        "",
    ),
    (
        re.compile(r"""\bdebugger\s*;"""),
        None,
        "medium", "logic",
        "debugger statement left in the code",
        "Remove the debugger statement",
        re.compile(r"""^[ \t]*debugger;[ \t]*\n?""", re.MULTILINE),
        "",
    ),
]

# Role id -> scanner rules. Roles without an entry use GENERIC_RULES.
ROLE_RULES = {
    "architect": STRUCTURE_RULES,
    "designer": VISUAL_RULES,
    "developer": LOGIC_RULES,
    "security": SECURITY_RULES,
    "performance": PERFORMANCE_RULES,
    "tester": TESTING_RULES,
    "accessibility": ACCESSIBILITY_RULES,
}
