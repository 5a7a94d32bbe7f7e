"""Clarification decider: whether to ask before generating, and how to read the answer."""

from config.defaults import DEFAULTS
from config.keywords import (
    AFFIRMATIVE_KEYWORDS,
    APP_TYPE_KEYWORDS,
    AUTH_KEYWORDS,
    DATABASE_KEYWORDS,
    DATABASE_PRODUCT_KEYWORDS,
    DESIGN_KEYWORDS,
    PAYMENT_PROVIDER_KEYWORDS,
    USE_DEFAULTS_PHRASES,
)
from core.state import ClarificationDecision
from manager.classifier import first_match, mentions, mentions_any

QUESTIONS = {
    "app_type": (
        "**What kind of application do you want?**\n"
        "- E-commerce\n- Landing page\n- Dashboard\n- Portfolio\n- Blog\n"
        "- CRM\n- Form\n- Something else (describe it)"
    ),
    "payment_provider": (
        "**Which payment provider?**\n- Stripe\n- PayPal\n- None for now"
    ),
    "database_product": (
        "**Which database should store the data?**\n"
        "- Supabase\n- Firebase\n- PostgreSQL\n- MongoDB\n- SQLite"
    ),
    "design": (
        "**Which design style?**\n"
        "- Minimal (clean, sober)\n- Modern (animations, gradients)\n"
        "- Corporate (professional)"
    ),
}

_INTRO = "I need a few details to build the right application for you:\n\n"
_OUTRO = "\n\nYou can answer briefly, or reply \"use defaults\" and I will decide."

_DB_STACK_NAMES = {"supabase": "Supabase", "firebase": "Firebase"}


def _pending_fields(intent, record):
    """Evaluate each trigger rule independently, in question order."""
    pending = []
    if record.app_type is None and intent.kind == "create":
        pending.append("app_type")
    if "payment" in record.features and not record.payment_provider:
        pending.append("payment_provider")
    if record.database and not record.database_product:
        pending.append("database_product")
    if record.design is None and intent.kind == "create":
        pending.append("design")
    return pending


def decide(intent, record):
    """Return a ClarificationDecision with at most one composed message."""
    pending = _pending_fields(intent, record)
    if not pending:
        return ClarificationDecision(needs_clarification=False, questions=[])

    defaults = DEFAULTS["clarification_defaults"]
    body = "\n\n".join(QUESTIONS[key] for key in pending)
    return ClarificationDecision(
        needs_clarification=True,
        questions=[_INTRO + body + _OUTRO],
        pending=pending,
        suggested_defaults={key: defaults[key] for key in pending},
    )


def wants_defaults(answer):
    return mentions_any(answer.lower(), USE_DEFAULTS_PHRASES)


def _set_database_product(record, product):
    record.database = True
    record.database_product = product
    stack_name = _DB_STACK_NAMES.get(product)
    if stack_name and stack_name not in record.stack:
        record.stack.append(stack_name)


def apply_defaults(record):
    """Give every still-unresolved field its documented default."""
    defaults = DEFAULTS["clarification_defaults"]
    if record.app_type is None:
        record.app_type = defaults["app_type"]
    if record.design is None:
        record.design = defaults["design"]
    if "payment" in record.features and not record.payment_provider:
        record.payment_provider = defaults["payment_provider"]
    if record.database and not record.database_product:
        _set_database_product(record, defaults["database_product"])
    if not record.stack:
        record.stack = list(DEFAULTS["default_stack"])
    return record


def resolve_answer(answer, prior):
    """Fold a clarification reply into a copy of `prior`.

    The returned record is generation-ready: whatever the reply did not settle
    receives its default, so a request is clarified at most once.
    """
    record = prior.thawed_copy()
    text = (answer or "").lower()

    if wants_defaults(text):
        record.features |= {"responsive", "seo"}
        return apply_defaults(record)

    app_type = first_match(text, APP_TYPE_KEYWORDS)
    if app_type:
        record.app_type = app_type

    design = first_match(text, DESIGN_KEYWORDS)
    if design:
        record.design = design

    provider = first_match(text, PAYMENT_PROVIDER_KEYWORDS)
    if provider:
        record.payment_provider = provider
        record.features.add("payment")

    product = first_match(text, DATABASE_PRODUCT_KEYWORDS)
    if product:
        _set_database_product(record, product)
    elif mentions_any(text, DATABASE_KEYWORDS):
        record.database = True

    if mentions_any(text, AUTH_KEYWORDS):
        record.authentication = True
        record.features.add("auth")

    if mentions(text, "responsive") or mentions(text, "mobile") or mentions_any(text, AFFIRMATIVE_KEYWORDS):
        record.features.add("responsive")

    return apply_defaults(record)
