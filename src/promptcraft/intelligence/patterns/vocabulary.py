"""Keyword tables shared by several patterns."""

from __future__ import annotations

import re

LANGUAGES: dict[str, str] = {
    "python": "Python",
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "java": "Java",
    "rust": "Rust",
    "golang": "Go",
    "ruby": "Ruby",
    "php": "PHP",
    "kotlin": "Kotlin",
    "swift": "Swift",
    "c#": "C#",
}

FRAMEWORKS = (
    "react",
    "vue",
    "angular",
    "svelte",
    "next\\.js",
    "django",
    "flask",
    "fastapi",
    "express",
    "spring",
    "rails",
    "laravel",
    "node(?:\\.js)?",
)

TECH_STACK = tuple(re.escape(name) for name in LANGUAGES) + FRAMEWORKS

DATABASES = ("postgres(?:ql)?", "mysql", "sqlite", "mongo(?:db)?", "redis", "dynamodb")

TEST_FRAMEWORKS = ("jest", "vitest", "mocha", "pytest", "unittest", "junit", "playwright", "cypress")

FILE_REFERENCE_RE = re.compile(
    r"[\w-]+\.(?:py|ts|tsx|js|jsx|java|go|rs|rb|php|json|ya?ml|sql|md)\b|(?:^|\s)\.{0,2}/[\w./-]+",
    re.IGNORECASE,
)
VERSION_RE = re.compile(r"\bv?\d+(?:\.\d+)+\b|\bversion\s*\d+|\b[A-Za-z]+\s+\d{1,3}\b")

DOMAINS: dict[str, tuple[str, ...]] = {
    "authentication": (
        "login",
        "log in",
        "sign ?in",
        "sign ?up",
        "auth",
        "authentication",
        "jwt",
        "oauth",
        "passwords?",
        "sessions?",
    ),
    "api": ("api", "apis", "endpoints?", "rest", "graphql", "webhooks?", "http"),
    "database": (
        "database",
        "db",
        "sql",
        "query",
        "queries",
        "schema",
        "prisma",
        "orm",
        *DATABASES,
    ),
    "frontend": (
        "ui",
        "components?",
        "forms?",
        "pages?",
        "buttons?",
        "css",
        "react",
        "vue",
        "angular",
        "svelte",
        "frontend",
        "jsx",
    ),
    "testing": ("tests?", "mocks?", "fixtures?", "specs?", "coverage"),
    "payments": ("payments?", "checkout", "stripe", "billing", "invoices?", "subscriptions?"),
}
