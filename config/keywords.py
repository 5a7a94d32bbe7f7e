"""Keyword tables used by the requirement extractor and the response hint.

Every table maps a tag to the keywords that select it. Single-valued tables
are ordered: the first entry whose keywords match wins. Keywords match at a
word start, so "crée" also matches "créer" but "api" does not match "rapide".
Bump KEYWORD_TABLES_VERSION whenever a table changes meaning.
"""

KEYWORD_TABLES_VERSION = "3"

# --- Intent ---
CREATE_KEYWORDS = [
    "créer", "crée", "créé", "cree", "faire", "fais", "générer", "génère",
    "construire", "construis", "développer", "développe", "app", "site",
    "application", "todo", "to-do", "dashboard", "page", "formulaire",
    "create", "build", "make", "generate", "develop",
]
MODIFY_KEYWORDS = [
    "modifier", "modifie", "changer", "change", "améliorer", "améliore",
    "ajouter", "ajoute", "supprimer", "corriger", "corrige",
    "modify", "update", "improve", "fix",
]
QUESTION_KEYWORDS = [
    "comment", "pourquoi", "qu'est-ce", "est-ce que", "quel", "quelle",
    "how", "why", "what", "which",
]

# --- Single-valued (ordered, first match wins) ---
APP_TYPE_KEYWORDS = [
    ("e-commerce", ["e-commerce", "ecommerce", "boutique", "shop", "magasin"]),
    ("landing-page", ["landing", "page d'accueil", "homepage"]),
    ("dashboard", ["dashboard", "tableau de bord", "admin panel"]),
    ("portfolio", ["portfolio"]),
    ("blog", ["blog"]),
    ("crm", ["crm", "gestion client", "customer management"]),
    ("form", ["formulaire", "contact form", "survey"]),
]
APP_TYPES = [name for name, _ in APP_TYPE_KEYWORDS]

DESIGN_KEYWORDS = [
    ("minimal", ["minimal", "épuré", "sobre", "clean"]),
    ("modern", ["moderne", "modern", "animé", "animated", "gradient"]),
    ("corporate", ["corporate", "professionnel", "professional", "sérieux"]),
]

DATABASE_PRODUCT_KEYWORDS = [
    ("supabase", ["supabase"]),
    ("firebase", ["firebase"]),
    ("postgresql", ["postgres", "postgresql"]),
    ("mysql", ["mysql"]),
    ("mongodb", ["mongodb", "mongo"]),
    ("sqlite", ["sqlite"]),
]

PAYMENT_PROVIDER_KEYWORDS = [
    ("stripe", ["stripe"]),
    ("paypal", ["paypal"]),
]

TARGET_KEYWORDS = [
    ("both", ["web et mobile", "web and mobile", "multiplateforme", "cross-platform"]),
    ("mobile", ["application mobile", "mobile app", "ios", "android"]),
]

# --- Multi-valued ---
FEATURE_KEYWORDS = {
    "auth": ["authentification", "authentication", "connexion", "login", "inscription", "register", "sign up"],
    "payment": ["paiement", "payment", "stripe", "paypal", "checkout"],
    "crud": ["crud", "gestion", "supprimer", "modifier"],
    "realtime": ["temps réel", "realtime", "real-time", "live", "instantané", "websocket"],
    "search": ["recherche", "search", "filtre", "filter"],
    "upload": ["upload", "téléverser", "fichier", "image"],
    "api": ["api", "backend", "serveur", "server"],
    "responsive": ["responsive", "mobile", "tablette", "adaptatif"],
    "seo": ["seo", "référencement", "meta tags"],
    "analytics": ["analytics", "statistiques", "tracking"],
}
FEATURE_VOCABULARY = frozenset(FEATURE_KEYWORDS)

STACK_KEYWORDS = [
    ("Vue.js", ["vue"]),
    ("Angular", ["angular"]),
    ("Svelte", ["svelte"]),
    ("Node.js", ["node"]),
    ("Express", ["express"]),
    ("Next.js", ["next.js", "nextjs"]),
    ("Supabase", ["supabase"]),
    ("Firebase", ["firebase"]),
]

DATABASE_KEYWORDS = ["base de données", "database", "bdd", "db"] + [
    kw for _, kws in DATABASE_PRODUCT_KEYWORDS for kw in kws
]
AUTH_KEYWORDS = ["auth", "connexion", "login", "utilisateur", "user account"]

# --- Routing ---
COMPLEX_KEYWORDS = [
    "authentification", "auth", "connexion", "login", "signup", "register",
    "paiement", "payment", "stripe", "paypal", "checkout",
    "base de données", "database", "db", "backend", "api", "serveur",
    "temps réel", "realtime", "websocket", "live",
    "admin", "multi-page", "plusieurs pages", "complet", "avancé",
    "professionnel", "enterprise",
]

# Request terms that make a multi-file project the expected response shape
MULTI_FILE_HINTS = [
    "react", "vue", "svelte", "angular", "next.js", "nextjs", "vite",
    "express", "node", "deno", "backend", "server", "serveur",
    "api", "database", "base de données", "postgres", "mongodb", "supabase",
    "firebase", "typescript", "full-stack", "fullstack", "multi-fichier",
    "project", "projet",
]

# --- Clarification replies ---
USE_DEFAULTS_PHRASES = ["défaut", "defaut", "default", "décide", "you decide", "whatever"]
AFFIRMATIVE_KEYWORDS = ["oui", "yes"]
