"""Default pipeline settings."""

DEFAULTS = {
    "model": "claude-sonnet-4-5-20250929",
    "max_tokens": 16384,
    "request_timeout": 600,          # seconds, enforced by the transport client
    "max_request_chars": 10000,
    "document_char_cap": 2000,       # per attached document
    "max_parallel_roles": 8,
    "parallel_estimate_seconds": 30,
    "sequential_seconds_per_role": 10,
    "generation_mode": "auto",       # auto | fast | merge
    "simple_request_max_chars": 200,
    "auto_fix": True,
    "session_max_age": 3600,         # seconds before resolved sessions are dropped
    "default_stack": ["React", "TypeScript", "Tailwind CSS"],
    "clarification_defaults": {
        "app_type": "landing-page",
        "design": "modern",
        "payment_provider": "stripe",
        "database_product": "supabase",
    },
}
