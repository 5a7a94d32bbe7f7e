"""Generator agent — builds role prompts and calls the generation transport."""

import os

from core.state import GenerationRequest
from utils.llm import call_llm

_PROMPT_DIR = os.path.join(os.path.dirname(__file__), "prompts")


def _load_prompt(name):
    with open(os.path.join(_PROMPT_DIR, f"{name}.txt"), encoding="utf-8") as f:
        return f.read()


def _context_fields(record):
    """The requirement fields a role needs to see, in a stable order."""
    return {
        "app_type": record.app_type,
        "design": record.design,
        "features": sorted(record.features),
        "stack": list(record.stack),
        "database": record.database_product or record.database,
        "authentication": record.authentication,
        "payment_provider": record.payment_provider,
        "target": record.target,
        "complexity": record.complexity,
    }


def _render_context(fields):
    lines = []
    for key, value in fields.items():
        if value in (None, False, [], ""):
            continue
        if isinstance(value, list):
            value = ", ".join(value)
        lines.append(f"- {key}: {value}")
    return "\n".join(lines)


def _render_documents(record):
    parts = []
    for doc in record.documents:
        parts.append(f"--- ATTACHED DOCUMENT: {doc.name} ({doc.mime}) ---\n{doc.text_content}")
    return "\n\n".join(parts)


class GeneratorAgent:
    """Turns a (role, requirements) pair into one generation call."""

    name = "generator"

    def build_request(self, role, record) -> GenerationRequest:
        return GenerationRequest(
            role_instructions=role.domain_instructions,
            user_request_summary=record.source_text,
            context_fields=_context_fields(record),
        )

    def system_prompt(self, role):
        """Shared behaviour, then issue handling, then the role's own brief."""
        return "\n\n".join([
            _load_prompt("universal"),
            _load_prompt("issue_handling"),
            f"YOUR ROLE: {role.display_name}\n{role.domain_instructions}",
        ])

    def user_message(self, request, record):
        parts = [f"User request: {request.user_request_summary}"]
        context = _render_context(request.context_fields)
        if context:
            parts.append(f"Requirements:\n{context}")
        documents = _render_documents(record)
        if documents:
            parts.append(documents)
        return "\n\n".join(parts)

    def generate(self, role, record):
        """Run one role. Transport failures propagate as TransportError."""
        request = self.build_request(role, record)
        return call_llm(self.system_prompt(role), self.user_message(request, record))

    def generate_single(self, text, record, expect_multi_file):
        """One call for the whole application; the caller classifies the reply."""
        request = GenerationRequest(
            role_instructions="",
            user_request_summary=text,
            context_fields=_context_fields(record),
        )
        message = self.user_message(request, record)
        if expect_multi_file:
            message += "\n\nThis request needs a multi-file project (FORMAT B)."
        return call_llm(_load_prompt("single_shot"), message)

    def answer(self, text):
        """Reply to a plain question, no artifact involved."""
        return call_llm(_load_prompt("assistant"), text)
