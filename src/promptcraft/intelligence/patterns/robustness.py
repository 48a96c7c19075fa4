"""Patterns about failure modes, edge cases and verification."""

from __future__ import annotations

import re

from promptcraft.intelligence.patterns.base import BasePattern
from promptcraft.intelligence.patterns.vocabulary import DOMAINS
from promptcraft.intelligence.text_utils import (
    contains_any,
    contains_phrase,
    render_section,
    unique,
)
from promptcraft.intelligence.types import (
    Impact,
    Intent,
    PatternContext,
    PatternMode,
    PatternResult,
    QualityDimension,
)


class ErrorToleranceEnhancer(BasePattern):
    """Add failure scenarios and an error-handling strategy."""

    id = "error-tolerance-enhancer"
    name = "Error Tolerance Enhancer"
    description = "Adds error handling requirements and failure mode considerations"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.REFINEMENT,
            Intent.DEBUGGING,
            Intent.MIGRATION,
            Intent.TESTING,
        }
    )
    mode = PatternMode.DEEP
    priority = 5
    dimension = QualityDimension.COMPLETENESS

    _INDICATORS = (
        "error handling",
        "error cases",
        "exception",
        "try catch",
        "try/catch",
        "failure mode",
        "edge case",
        "fallback",
        "graceful",
        "robust",
        "resilient",
        "retry",
        "timeout",
        "validation",
        "sanitize",
        "invalid input",
        "null check",
        "undefined check",
    )
    _CATEGORIES: tuple[tuple[str, re.Pattern[str]], ...] = (
        ("api", re.compile(r"\b(?:api|fetch|http|request|endpoint|rest|graphql)\b", re.IGNORECASE)),
        ("database", re.compile(r"\b(?:database|db|sql|query|postgres|mysql|mongo|redis)\b", re.IGNORECASE)),
        ("user_input", re.compile(r"\b(?:input|form|user|field|param)\b", re.IGNORECASE)),
        ("file_system", re.compile(r"\b(?:file|read|write|fs|path|directory|upload|download)\b", re.IGNORECASE)),
        ("async", re.compile(r"\b(?:async|await|promise|callback|event|queue)\b", re.IGNORECASE)),
    )
    _SCENARIOS = {
        "api": (
            "Network timeout or connection failure",
            "HTTP 4xx client errors (400, 401, 403, 404)",
            "HTTP 5xx server errors",
            "Rate limiting (429)",
            "Invalid or malformed response",
            "Authentication token expiry",
        ),
        "database": (
            "Connection pool exhaustion",
            "Query timeout",
            "Constraint violation",
            "Deadlock detection",
            "Data integrity errors",
            "Migration failures",
        ),
        "user_input": (
            "Empty or null input",
            "Invalid format",
            "Input too long or too short",
            "XSS or injection attempts",
            "Encoding issues",
            "Type coercion errors",
        ),
        "file_system": (
            "File not found",
            "Permission denied",
            "Disk full",
            "Path too long",
            "Concurrent access",
            "Corrupted files",
        ),
        "async": (
            "Promise rejection",
            "Race conditions",
            "Deadlocks",
            "Memory leaks",
            "Unhandled callbacks",
            "Event loop blocking",
        ),
        "general": (
            "Null or undefined values",
            "Type mismatches",
            "Out of bounds access",
            "Division by zero",
            "Stack overflow",
            "Memory exhaustion",
        ),
    }
    _PER_CATEGORY = 3
    _MAX_SCENARIOS = 6
    _STRATEGY = (
        "Provide meaningful error messages",
        "Log errors with context for debugging",
        "Fail gracefully when possible",
        "Consider retry logic for transient failures",
        "Don't expose sensitive information in error responses",
    )

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, self._INDICATORS):
            return self._skip(text, "Error handling already addressed")

        source = self._user_text(text, context)
        categories = [name for name, regex in self._CATEGORIES if regex.search(source)] or ["general"]
        scenarios: list[str] = []
        for category in categories:
            scenarios.extend(self._SCENARIOS[category][: self._PER_CATEGORY])
        scenarios = unique(scenarios)[: self._MAX_SCENARIOS]

        strategy = "\n".join(f"- {item}" for item in self._STRATEGY)
        section = render_section(
            "Error Handling Requirements",
            scenarios,
            intro="Consider handling these failure scenarios:",
            footer=f"**Error Handling Strategy**:\n{strategy}",
        )
        return self._append(
            text,
            section,
            f"Added {len(scenarios)} error handling considerations",
        )


class EdgeCaseIdentifier(BasePattern):
    """List the edge cases typical for the domains and intent at hand."""

    id = "edge-case-identifier"
    name = "Edge Case Identifier"
    description = "Identifies edge cases by domain and intent"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.DEBUGGING,
            Intent.TESTING,
            Intent.MIGRATION,
            Intent.SECURITY_REVIEW,
        }
    )
    mode = PatternMode.DEEP
    priority = 4
    dimension = QualityDimension.COMPLETENESS

    _DOMAIN_CASES: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
        (
            ("input", "forms?", "fields?", "user data"),
            (
                "Empty, whitespace-only or missing fields",
                "Extremely long values and special or unicode characters",
            ),
        ),
        (
            DOMAINS["api"] + ("fetch(?:es)?",),
            (
                "Network failure or timeout mid-request",
                "Malformed or partial responses",
            ),
        ),
        (
            ("arrays?", "lists?", "collections?", "items"),
            (
                "Empty collection and single-item collection",
                "Very large collections",
            ),
        ),
        (
            ("sessions?", "auth", "authentication", "login", "tokens?"),
            (
                "Session expiring in the middle of an operation",
                "The same account logged in from two devices",
            ),
        ),
        (
            ("async", "concurrent", "concurrency", "parallel", "threads?"),
            ("Race conditions from simultaneous updates",),
        ),
        (
            ("payments?", "checkout", "billing"),
            (
                "Duplicate submissions of the same payment",
                "Currency rounding and zero-amount orders",
            ),
        ),
    )
    _INTENT_CASES = {
        Intent.DEBUGGING: (
            "Intermittent failures that only appear under load",
            "Environment-specific behaviour (local vs production)",
            "Conditions that are hard to reproduce",
        ),
        Intent.TESTING: (
            "Test isolation: shared state leaking between tests",
            "Flaky timing-dependent assertions",
            "Mock drift from the real implementation",
        ),
        Intent.MIGRATION: (
            "Partial migration failure leaving mixed data",
            "Data format mismatches between versions",
            "Rollback after data has already changed",
        ),
        Intent.SECURITY_REVIEW: (
            "Privilege escalation through parameter tampering",
            "Replay of expired or revoked tokens",
        ),
    }
    _BOUNDARY = "Boundary conditions: min and max values, zero, off-by-one"
    _MAX_CASES = 10

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, ("edge case",)):
            return self._skip(text, "Edge cases already covered")

        source = self._user_text(text, context)
        cases: list[str] = []
        for keywords, domain_cases in self._DOMAIN_CASES:
            if contains_any(source, keywords):
                cases.extend(domain_cases)
        cases.extend(self._INTENT_CASES.get(context.intent.primary_intent, ()))
        cases.append(self._BOUNDARY)

        cases = unique(cases)[: self._MAX_CASES]
        section = render_section("Edge Cases to Consider", cases)
        return self._append(
            text,
            section,
            f"Identified {len(cases)} edge cases",
            Impact.HIGH if len(cases) >= 5 else Impact.MEDIUM,
        )


class ValidationChecklistCreator(BasePattern):
    """Close with a checklist to verify the result against."""

    id = "validation-checklist-creator"
    name = "Validation Checklist Creator"
    description = "Creates a checklist to verify the result"
    applicable_intents = frozenset(
        {
            Intent.CODE_GENERATION,
            Intent.TESTING,
            Intent.MIGRATION,
            Intent.SECURITY_REVIEW,
            Intent.DEBUGGING,
        }
    )
    mode = PatternMode.DEEP
    priority = 3
    dimension = QualityDimension.ACTIONABILITY

    _INTENT_ITEMS = {
        Intent.CODE_GENERATION: (
            "Code runs without errors",
            "Follows the existing conventions of the codebase",
            "No hardcoded secrets or credentials",
        ),
        Intent.TESTING: (
            "Tests pass consistently",
            "Each test is independent of the others",
            "Edge cases and failure paths are covered",
        ),
        Intent.MIGRATION: (
            "Data migrated completely and verified",
            "Rollback procedure tested",
            "Performance unchanged or better after the migration",
        ),
        Intent.SECURITY_REVIEW: (
            "Authentication enforced on every protected route",
            "Authorization checked for each resource",
            "All external input sanitized",
        ),
        Intent.DEBUGGING: (
            "Root cause identified and documented",
            "Bug no longer reproducible",
            "Regression test added",
        ),
    }
    _DOMAIN_ITEMS = {
        "api": ("Returns correct status codes", "Rejects invalid requests with clear errors"),
        "frontend": ("Works across screen sizes", "Keyboard navigable and meets accessibility guidelines"),
        "testing": ("Unit tests cover the main paths", "Coverage does not drop"),
        "payments": ("Amounts are verified server-side", "Charges are idempotent"),
        "authentication": ("Passwords are never logged", "Sessions expire as configured"),
    }
    _MAX_ITEMS = 10

    def _enhance(self, text: str, context: PatternContext) -> PatternResult:
        if contains_phrase(text, ("checklist",)):
            return self._skip(text, "Checklist already present")

        source = self._user_text(text, context)
        items = list(self._INTENT_ITEMS[context.intent.primary_intent])
        for domain, domain_items in self._DOMAIN_ITEMS.items():
            if contains_any(source, DOMAINS[domain]):
                items.extend(domain_items)

        items = unique(items)[: self._MAX_ITEMS]
        section = render_section("Validation Checklist", items, style="ballot")
        return self._append(text, section, f"Added a {len(items)}-item validation checklist", Impact.LOW)
