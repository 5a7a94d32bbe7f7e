"""Classify a raw generation response and pull the artifact out of it.

Ladder: fenced multi-file payload, raw discriminator with brace scan,
salvage of fenced regions, then the whole text as a single document.
Nothing here raises on bad model output.
"""

import json
import logging
import os
import re

from core.state import FileEntry, MultiFileProject, SingleDocument
from manager.classifier import expects_multi_file
from utils.brace_scanner import candidate_starts, extract_balanced, next_start
from utils.folder_naming import extract_project_name

DISCRIMINATOR = '"multi-file"'
FILES_KEY = '"files"'

_FENCE_RE = re.compile(r"```([^\n`]*)\n(.*?)```", re.DOTALL)

# Filepath in a comment on the first line of a block
_COMMENT_PATH_RE = re.compile(r"^(?:#|//|/\*|<!--)\s*([\w./-]+\.\w+)\s*(?:\*/|-->)?[ \t]*\n")

_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")

_EXT_BY_TAG = {
    "javascript": "js", "js": "js", "jsx": "jsx", "typescript": "ts", "ts": "ts",
    "tsx": "tsx", "html": "html", "css": "css", "json": "json", "python": "py",
    "py": "py", "bash": "sh", "sh": "sh", "shell": "sh", "yaml": "yml",
    "yml": "yml", "markdown": "md", "md": "md", "sql": "sql", "vue": "vue",
    "svelte": "svelte", "toml": "toml", "env": "env",
}

_LANGUAGE_BY_EXT = {
    ".py": "python", ".html": "html", ".css": "css",
    ".js": "javascript", ".jsx": "javascript", ".mjs": "javascript",
    ".ts": "typescript", ".tsx": "typescript", ".json": "json",
    ".txt": "text", ".md": "markdown", ".yml": "yaml", ".yaml": "yaml",
    ".toml": "toml", ".cfg": "ini", ".ini": "ini", ".sql": "sql",
    ".vue": "vue", ".svelte": "svelte", ".sh": "shell",
}


def guess_language(filepath):
    """Guess language from file extension."""
    _, ext = os.path.splitext(filepath)
    return _LANGUAGE_BY_EXT.get(ext.lower(), "text")


def fenced_regions(text):
    """Return (tag, content) for every closed ``` region, in order."""
    return [(m.group(1).strip(), m.group(2)) for m in _FENCE_RE.finditer(text)]


def has_discriminator(text):
    return DISCRIMINATOR in text and FILES_KEY in text


# ---------------------------------------------------------------------------
# JSON payload
# ---------------------------------------------------------------------------

def parse_payload(candidate):
    """Parse a JSON object, repairing trailing commas and raw control characters.

    Returns a dict, or None when the candidate cannot be repaired.
    """
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        repaired = _TRAILING_COMMA_RE.sub(r"\1", candidate.strip())
        try:
            # strict=False accepts literal newlines and tabs inside strings
            data = json.loads(repaired, strict=False)
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


def build_project(payload, request=""):
    """Turn a decoded payload into a MultiFileProject.

    Raises ValueError when the payload is not a multi-file payload or lists
    no usable files.
    """
    if payload.get("type") != "multi-file":
        raise ValueError("Payload type is not 'multi-file'")
    raw_files = payload.get("files")
    if not isinstance(raw_files, list):
        raise ValueError("Payload 'files' is not a list")

    files = []
    for item in raw_files:
        if not isinstance(item, dict):
            continue
        path = item.get("path")
        content = item.get("content")
        if not isinstance(path, str) or not path.strip() or not isinstance(content, str):
            continue
        path = path.strip()
        files.append(FileEntry(path=path, content=content, language=guess_language(path)))

    entry_file = payload.get("mainFile")
    if not isinstance(entry_file, str) or not entry_file:
        entry_file = files[0].path if files else ""

    name = payload.get("projectName")
    if not isinstance(name, str) or not name.strip():
        name = extract_project_name(request)

    return MultiFileProject(
        name=name,
        files=files,
        entry_file=entry_file,
        setup_notes=str(payload.get("setupInstructions") or ""),
    )


def _try_candidate(candidate, request, logger):
    payload = parse_payload(candidate)
    if payload is None:
        return None
    try:
        return build_project(payload, request)
    except ValueError as e:
        logger.debug("Rejected multi-file candidate: %s", e)
        return None


def _from_fences(regions, request, logger):
    for tag, content in regions:
        body = content.strip()
        if not body.startswith("{") or not has_discriminator(body):
            continue
        project = _try_candidate(body, request, logger)
        if project is not None:
            logger.debug("Multi-file payload found in fenced region (tag=%r)", tag)
            return project
    return None


def _raw_candidates(text, anchor):
    """Objects enclosing `anchor` (nearest first), then the first one after it.

    The forward candidate covers a prose mention of the marker followed by
    the payload itself.
    """
    for start in candidate_starts(text, anchor):
        candidate = extract_balanced(text, start)
        if candidate is not None and start + len(candidate) > anchor:
            yield start, candidate
    start = next_start(text, anchor)
    if start != -1:
        candidate = extract_balanced(text, start)
        if candidate is not None:
            yield start, candidate


def _from_raw_text(text, request, logger):
    tried = set()
    for match in re.finditer(re.escape(DISCRIMINATOR), text):
        for start, candidate in _raw_candidates(text, match.start()):
            if start in tried:
                continue
            tried.add(start)
            if not has_discriminator(candidate):
                continue
            project = _try_candidate(candidate, request, logger)
            if project is not None:
                logger.debug("Multi-file payload found by brace scan at offset %d", start)
                return project
    return None


# ---------------------------------------------------------------------------
# Salvage
# ---------------------------------------------------------------------------

def _filename_from_tag(tag):
    tokens = tag.split()
    if not tokens:
        return None
    # ```app.py  or  ```src/App.jsx
    if "." in tokens[0] and not tokens[0].startswith("."):
        return tokens[0]
    # ```python app.py
    if len(tokens) > 1 and "." in tokens[1]:
        return tokens[1]
    return None


def _looks_like_json(tag, body):
    return tag.split()[:1] == ["json"] or body.lstrip().startswith(("{", "["))


def _looks_like_html(tag, body):
    head = body.lstrip()[:15].lower()
    return tag.split()[:1] == ["html"] or head.startswith(("<!doctype", "<html"))


def _dedupe(path, taken):
    if path not in taken:
        return path
    stem, ext = os.path.splitext(path)
    n = 2
    while f"{stem}-{n}{ext}" in taken:
        n += 1
    return f"{stem}-{n}{ext}"


def salvage_files(regions):
    """Name each fenced region and return FileEntry objects.

    Name inference order: filename in the tag, filename comment on the first
    line, first JSON-like block as package.json, first HTML-like block as
    index.html, else file-<position>.<ext> with the 1-based region position.
    Regions holding the broken multi-file payload are skipped.
    """
    files = []
    taken = set()
    json_named = False
    html_named = False

    for position, (tag, content) in enumerate(regions, start=1):
        if DISCRIMINATOR in content:
            continue
        if not content.strip():
            continue

        filename = _filename_from_tag(tag)
        if filename is None:
            cm = _COMMENT_PATH_RE.match(content)
            if cm:
                filename = cm.group(1)
                content = content[cm.end():]
        if filename is None and not json_named and _looks_like_json(tag, content):
            filename = "package.json"
            json_named = True
        if filename is None and not html_named and _looks_like_html(tag, content):
            filename = "index.html"
            html_named = True
        if filename is None:
            lang = tag.split()[0].lower() if tag else ""
            filename = f"file-{position}.{_EXT_BY_TAG.get(lang, 'txt')}"

        if content.endswith("\n"):
            content = content[:-1]

        filename = _dedupe(filename, taken)
        taken.add(filename)
        files.append(FileEntry(path=filename, content=content, language=guess_language(filename)))

    return files


def _salvage(regions, request, logger):
    files = salvage_files(regions)
    if not files:
        return None
    logger.warning("Salvaged %d files from an unparseable multi-file response", len(files))
    entry = next((f.path for f in files if f.path == "index.html"), files[0].path)
    return MultiFileProject(
        name=extract_project_name(request),
        files=files,
        entry_file=entry,
        setup_notes="",
        salvaged=True,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def strip_wrapping_fence(text):
    """Remove one fence wrapping the whole text, if there is one."""
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```") and len(stripped) > 6:
        first_newline = stripped.find("\n")
        if first_newline != -1:
            return stripped[first_newline + 1:-3].strip("\n")
    return text


def extract_artifact(response, request, logger=None):
    """Classify `response` and return a SingleDocument or MultiFileProject."""
    logger = logger or logging.getLogger(__name__)
    text = response or ""
    expect_multi = expects_multi_file(request)

    if not expect_multi and DISCRIMINATOR not in text:
        return SingleDocument(content=strip_wrapping_fence(text))

    regions = fenced_regions(text)

    project = _from_fences(regions, request, logger)
    if project is None and has_discriminator(text):
        project = _from_raw_text(text, request, logger)
    if project is not None:
        return project

    if expect_multi:
        project = _salvage(regions, request, logger)
        if project is not None:
            return project
        logger.info("No fenced regions to salvage, returning a single document")

    return SingleDocument(content=strip_wrapping_fence(text))
