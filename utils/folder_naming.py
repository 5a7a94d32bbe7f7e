"""Project naming and safe output paths for generated projects."""

import os
import re

# French and English words that say nothing about the project itself
FILLER = {
    "build", "me", "a", "an", "the", "create", "make", "generate",
    "write", "for", "to", "with", "using", "that", "and", "app",
    "application", "tool", "please", "can", "you", "i", "want", "need",
    "some", "new", "my", "in", "of", "on",
    "crée", "créer", "creer", "fais", "faire", "génère", "générer",
    "moi", "un", "une", "le", "la", "les", "des", "de", "du", "pour",
    "avec", "et", "en", "je", "veux", "voudrais", "site", "web",
}

MAX_DEDUP = 1000


def slugify(text):
    """Convert text to a kebab-case slug usable as a folder or package name."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "-", text)
    return text.strip("-")


def extract_project_name(request):
    """Pull a short project name from the request text."""
    words = re.sub(r"[^\w\s]", " ", (request or "").lower()).split()
    meaningful = [w for w in words if w not in FILLER]
    name = slugify("-".join(meaningful[:3]))
    return name or "project"


def resolve_inside(output_dir, relative_path):
    """Join `relative_path` onto `output_dir`, refusing paths that escape it."""
    full_path = os.path.join(output_dir, relative_path)
    resolved = os.path.realpath(full_path)
    if not resolved.startswith(os.path.realpath(output_dir) + os.sep):
        raise ValueError(f"Path escapes output directory: {relative_path}")
    return resolved


def unique_dir(base):
    """Return `base`, or `base-2`, `base-3`... if it already exists."""
    if not os.path.exists(base):
        return base
    for counter in range(2, MAX_DEDUP + 2):
        candidate = f"{base}-{counter}"
        if not os.path.exists(candidate):
            return candidate
    raise RuntimeError(f"Too many duplicate projects (>{MAX_DEDUP}) for: {base}")


def write_project(project, parent_dir):
    """Write every file of a MultiFileProject under a fresh folder in `parent_dir`.

    Returns the folder path.
    """
    target = unique_dir(os.path.join(parent_dir, slugify(project.name) or "project"))
    # Resolve every path first: a bad entry must not leave a half-written folder
    planned = [(resolve_inside(target, entry.path), entry.content) for entry in project.files]
    for path, content in planned:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    return target
