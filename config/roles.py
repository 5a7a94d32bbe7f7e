"""Role catalog: one plain dict per content-generation specialisation.

Kept as serialisable data; lookups live in core.scheduler.
"""

# Roles every plan starts with, and roles every plan ends with
FOUNDATIONAL_ROLES = ("architect", "designer", "developer")
CLOSING_ROLES = ("tester", "documenter", "accessibility")

ROLE_CATALOG = (
    {
        "id": "architect",
        "display_name": "Architect",
        "priority": 1,
        "domain_instructions": (
            "You own the project structure: folder layout, naming conventions, "
            "state management strategy, routing and build configuration. "
            "Watch for circular dependencies and inconsistent module boundaries."
        ),
    },
    {
        "id": "designer",
        "display_name": "UI/UX Designer",
        "priority": 2,
        "domain_instructions": (
            "You own the visual design: colour palette, typography, spacing, "
            "layout, animations and interaction states, using Tailwind utility "
            "classes. Keep contrast above 4.5:1 and support dark mode."
        ),
    },
    {
        "id": "security",
        "display_name": "Security Expert",
        "priority": 2,
        "domain_instructions": (
            "You own authentication, authorisation and data protection. Never "
            "hardcode secrets, sanitise any HTML you render, validate every "
            "input and protect state-changing requests."
        ),
    },
    {
        "id": "developer",
        "display_name": "Developer",
        "priority": 3,
        "domain_instructions": (
            "You own the functional code: components, hooks, business logic, "
            "API integration, validation and error handling."
        ),
    },
    {
        "id": "backend",
        "display_name": "Backend Developer",
        "priority": 3,
        "domain_instructions": (
            "You own the server side: REST routes, middleware, database schema "
            "and queries, sessions, rate limiting and CORS."
        ),
    },
    {
        "id": "mobile",
        "display_name": "Mobile Developer",
        "priority": 3,
        "domain_instructions": (
            "You own mobile-first behaviour: responsive breakpoints, touch "
            "targets, offline support and installable PWA metadata."
        ),
    },
    {
        "id": "tester",
        "display_name": "QA Tester",
        "priority": 4,
        "domain_instructions": (
            "You own quality: unit and integration tests, edge cases, input "
            "validation paths and regression scenarios."
        ),
    },
    {
        "id": "performance",
        "display_name": "Performance Engineer",
        "priority": 4,
        "domain_instructions": (
            "You own performance: bundle size, lazy loading, memoisation, "
            "render counts and Core Web Vitals."
        ),
    },
    {
        "id": "seo",
        "display_name": "SEO Specialist",
        "priority": 4,
        "domain_instructions": (
            "You own discoverability: meta tags, Open Graph, structured data, "
            "semantic headings, sitemap and analytics hooks."
        ),
    },
    {
        "id": "accessibility",
        "display_name": "Accessibility Expert",
        "priority": 4,
        "domain_instructions": (
            "You own accessibility: alt text, ARIA labels, keyboard navigation, "
            "focus management and WCAG contrast."
        ),
    },
    {
        "id": "documenter",
        "display_name": "Technical Writer",
        "priority": 5,
        "domain_instructions": (
            "You own documentation: README with setup and run instructions, "
            "component usage notes and concise code comments."
        ),
    },
    {
        "id": "devops",
        "display_name": "DevOps Engineer",
        "priority": 5,
        "domain_instructions": (
            "You own delivery: build scripts, CI workflow, environment "
            "variables and deployment configuration."
        ),
    },
)
