"""Keyword-table requirement extraction, intent detection and routing hints."""

import re

from config.defaults import DEFAULTS
from config.keywords import (
    APP_TYPE_KEYWORDS,
    AUTH_KEYWORDS,
    COMPLEX_KEYWORDS,
    CREATE_KEYWORDS,
    DATABASE_KEYWORDS,
    DATABASE_PRODUCT_KEYWORDS,
    DESIGN_KEYWORDS,
    FEATURE_KEYWORDS,
    MODIFY_KEYWORDS,
    MULTI_FILE_HINTS,
    PAYMENT_PROVIDER_KEYWORDS,
    QUESTION_KEYWORDS,
    STACK_KEYWORDS,
    TARGET_KEYWORDS,
)
from core.state import AttachedDocument, Intent, RequirementRecord

_PATTERN_CACHE = {}


def _keyword_pattern(keyword):
    pat = _PATTERN_CACHE.get(keyword)
    if pat is None:
        # Word-start anchored: "crée" matches "créer", "api" does not match "rapide"
        pat = re.compile(r"(?<!\w)" + re.escape(keyword))
        _PATTERN_CACHE[keyword] = pat
    return pat


def mentions(text, keyword):
    """True if `keyword` occurs in lowercased `text` at a word start."""
    return _keyword_pattern(keyword).search(text) is not None


def mentions_any(text, keywords):
    return any(mentions(text, kw) for kw in keywords)


def first_match(text, table):
    """Walk an ordered (tag, keywords) table and return the first tag that matches."""
    for tag, keywords in table:
        if mentions_any(text, keywords):
            return tag
    return None


def detect_features(text):
    """Return every feature tag whose keywords appear in lowercased `text`."""
    return {tag for tag, keywords in FEATURE_KEYWORDS.items() if mentions_any(text, keywords)}


def detect_stack(text):
    stack = list(DEFAULTS["default_stack"])
    for name, keywords in STACK_KEYWORDS:
        if mentions_any(text, keywords) and name not in stack:
            stack.append(name)
    return stack


def cap_document(doc):
    """Truncate an attached document's text to the configured cap."""
    cap = DEFAULTS["document_char_cap"]
    if len(doc.text_content) <= cap:
        return doc
    return AttachedDocument(name=doc.name, mime=doc.mime, text_content=doc.text_content[:cap])


def extract_requirements(request, documents=None):
    """Map raw request text (plus optional documents) to a RequirementRecord.

    Pure and synchronous; never raises. Fields with no matching keyword are
    left unset.
    """
    text = (request or "").lower()

    record = RequirementRecord(source_text=request or "")
    record.app_type = first_match(text, APP_TYPE_KEYWORDS)
    record.design = first_match(text, DESIGN_KEYWORDS)
    record.features = detect_features(text)
    record.stack = detect_stack(text)
    record.database = mentions_any(text, DATABASE_KEYWORDS)
    record.database_product = first_match(text, DATABASE_PRODUCT_KEYWORDS)
    record.authentication = mentions_any(text, AUTH_KEYWORDS)
    record.payment_provider = first_match(text, PAYMENT_PROVIDER_KEYWORDS)
    record.target = first_match(text, TARGET_KEYWORDS)

    if documents:
        record.documents = [cap_document(d) for d in documents]

    return record


def detect_intent(request):
    """Classify the request as create, modify or question.

    A create keyword wins over a question word; a modify keyword wins over
    create.
    """
    text = (request or "").lower()

    has_create = mentions_any(text, CREATE_KEYWORDS)
    has_modify = mentions_any(text, MODIFY_KEYWORDS)
    has_question = mentions_any(text, QUESTION_KEYWORDS)

    if has_modify:
        return Intent(kind="modify", confidence=0.7)
    if has_create:
        return Intent(kind="create", confidence=0.9)
    if has_question:
        return Intent(kind="question", confidence=0.6)
    return Intent(kind="question", confidence=0.0)


def is_simple_request(request, record):
    """Decide whether a single fast generation call is enough."""
    text = (request or "").lower()

    if record.app_type == "e-commerce":
        return False
    if mentions_any(text, COMPLEX_KEYWORDS):
        return False
    if len(record.features) > 2:
        return False
    if record.authentication or record.database:
        return False
    if len(request or "") > DEFAULTS["simple_request_max_chars"]:
        return False
    return True


def expects_multi_file(request):
    """True if the request names a framework, backend or project-level term."""
    return mentions_any((request or "").lower(), MULTI_FILE_HINTS)
