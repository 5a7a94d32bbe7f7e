"""Tests for manager.classifier."""

from core.state import AttachedDocument
from manager.classifier import (
    detect_intent,
    expects_multi_file,
    extract_requirements,
    first_match,
    is_simple_request,
    mentions,
)
from config.keywords import APP_TYPE_KEYWORDS, FEATURE_VOCABULARY


# --- Keyword matching ---

def test_mentions_matches_word_prefix():
    assert mentions("je veux créer un site", "crée")
    assert mentions("fully responsiveness", "responsive")


def test_mentions_ignores_mid_word():
    assert not mentions("une app rapide", "api")
    assert not mentions("capital", "api")


def test_first_match_respects_table_order():
    # "shop" (e-commerce) is listed before "dashboard"
    assert first_match("a shop with a dashboard", APP_TYPE_KEYWORDS) == "e-commerce"


# --- extract_requirements ---

def test_todo_list_leaves_app_type_unset():
    record = extract_requirements("crée une todo list")
    assert record.app_type is None
    assert record.features == set()
    assert record.complexity == "simple"


def test_source_text_kept():
    record = extract_requirements("Build a blog")
    assert record.source_text == "Build a blog"
    assert record.app_type == "blog"


def test_single_valued_fields():
    record = extract_requirements(
        "Build a modern e-commerce shop with Stripe and PostgreSQL for android"
    )
    assert record.app_type == "e-commerce"
    assert record.design == "modern"
    assert record.payment_provider == "stripe"
    assert record.database_product == "postgresql"
    assert record.database is True
    assert record.target == "mobile"


def test_features_accumulate():
    record = extract_requirements("un dashboard avec login, recherche et upload d'image, responsive")
    assert {"auth", "search", "upload", "responsive"} <= record.features
    assert record.authentication is True
    assert record.features <= FEATURE_VOCABULARY


def test_complexity_thresholds():
    record = extract_requirements("login, payment, search, upload, seo, analytics, realtime")
    assert len(record.features) > 5
    assert record.complexity == "complex"

    record = extract_requirements("login, search, upload")
    assert record.complexity == "medium"


def test_stack_defaults_and_additions():
    record = extract_requirements("a vue app with an express server")
    assert record.stack[:3] == ["React", "TypeScript", "Tailwind CSS"]
    assert "Vue.js" in record.stack
    assert "Express" in record.stack


def test_documents_capped():
    doc = AttachedDocument(name="brief.txt", mime="text/plain", text_content="x" * 5000)
    record = extract_requirements("build a landing page", documents=[doc])
    assert len(record.documents) == 1
    assert len(record.documents[0].text_content) == 2000
    # The caller's document is untouched
    assert len(doc.text_content) == 5000


def test_empty_request_never_raises():
    record = extract_requirements("")
    assert record.app_type is None
    assert record.features == set()


# --- detect_intent ---

def test_intent_create():
    intent = detect_intent("crée une todo list")
    assert intent.kind == "create"
    assert intent.confidence == 0.9


def test_intent_modify_wins_over_create():
    intent = detect_intent("modifie le site pour ajouter un footer")
    assert intent.kind == "modify"
    assert intent.confidence == 0.7


def test_intent_create_wins_over_question():
    assert detect_intent("how do I build a landing page").kind == "create"


def test_intent_question():
    intent = detect_intent("pourquoi utiliser tailwind ?")
    assert intent.kind == "question"
    assert intent.confidence == 0.6


def test_intent_unmatched():
    intent = detect_intent("bonjour")
    assert intent.kind == "question"
    assert intent.confidence == 0.0


# --- Routing hints ---

def test_simple_request():
    text = "crée une todo list"
    assert is_simple_request(text, extract_requirements(text))


def test_not_simple_with_complex_keyword():
    text = "a landing page with a backend"
    assert not is_simple_request(text, extract_requirements(text))


def test_not_simple_when_long():
    text = "a portfolio page " * 20
    assert not is_simple_request(text, extract_requirements(text))


def test_not_simple_for_ecommerce():
    text = "une boutique"
    assert not is_simple_request(text, extract_requirements(text))


def test_expects_multi_file():
    assert expects_multi_file("React app with an Express backend")
    assert expects_multi_file("un projet Vue")
    assert not expects_multi_file("une simple page html pour ma bio")
    assert not expects_multi_file("")
