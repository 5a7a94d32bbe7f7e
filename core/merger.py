"""Merge per-role outputs into one document."""

from config.roles import ROLE_CATALOG
from core.state import SingleDocument

NO_OUTPUT_PLACEHOLDER = (
    "<!-- GENERATION FAILED: no role produced any output. "
    "Check the transport configuration and try again. -->"
)

_PRIORITY = {entry["id"]: entry["priority"] for entry in ROLE_CATALOG}
_DISPLAY = {entry["id"]: entry["display_name"] for entry in ROLE_CATALOG}


def _banner(record):
    app_type = record.app_type or "application"
    stack = ", ".join(record.stack) if record.stack else "default stack"
    return f"<!-- Generated {app_type} | Stack: {stack} -->"


def merge_results(results, record) -> SingleDocument:
    """Concatenate succeeded outputs in role priority order.

    Failed results are dropped. With no success at all the document holds
    NO_OUTPUT_PLACEHOLDER instead of being empty.
    """
    succeeded = [r for r in results if r.succeeded]
    if not succeeded:
        return SingleDocument(content=NO_OUTPUT_PLACEHOLDER)

    # sorted() is stable, equal priorities keep plan order
    ordered = sorted(succeeded, key=lambda r: _PRIORITY.get(r.role_id, 99))

    sections = [_banner(record)]
    for result in ordered:
        name = _DISPLAY.get(result.role_id, result.role_id)
        sections.append(
            f"<!-- ===== {name} ({result.role_id}) | {result.elapsed_ms} ms ===== -->\n"
            f"{result.output_text.strip()}"
        )
    return SingleDocument(content="\n\n".join(sections))
